# src/mcp_code_review/providers/__init__.py
from .base import ReviewBackend
from .claude import ClaudeProvider
from .gemini import GeminiProvider
from .gpt import GPTProvider
from .registry import build_registry

__all__ = ["ReviewBackend", "ClaudeProvider", "GeminiProvider", "GPTProvider", "build_registry"]
