from mcp_code_review.errors import ReviewError
from .parser import parse_diff, format_for_review, diff_stats, FileDiff, Hunk
from .prompts import build_review_prompt, parse_review_response
from .validation import validate_request
from .source import SourceResolver
from .engine import ReviewEngine

__all__ = [
    "ReviewError",
    "parse_diff",
    "format_for_review",
    "diff_stats",
    "FileDiff",
    "Hunk",
    "build_review_prompt",
    "parse_review_response",
    "validate_request",
    "SourceResolver",
    "ReviewEngine",
]
