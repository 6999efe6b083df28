import logging
from collections.abc import Mapping
from types import MappingProxyType
from mcp_code_review.config import Settings
from mcp_code_review.credentials import mask_key
from .base import ReviewBackend
from .claude import ClaudeProvider
from .gemini import GeminiProvider
from .gpt import GPTProvider


logger = logging.getLogger(__name__)


PROVIDER_CLASSES: dict[str, type[ReviewBackend]] = {
    "anthropic": ClaudeProvider,
    "openai": GPTProvider,
    "google": GeminiProvider,
}


def build_registry(settings: Settings) -> Mapping[str, ReviewBackend]:
    """Instantiate one backend per configured API key.

    Built once at startup; the returned mapping is read-only.
    """
    backends: dict[str, ReviewBackend] = {}

    for name, provider_cls in PROVIDER_CLASSES.items():
        api_key = settings.api_key_for(name)
        if not api_key:
            continue
        try:
            backends[name] = provider_cls(
                api_key=api_key,
                timeout=getattr(settings, f"{name}_timeout"),
            )
        except Exception as e:
            logger.error(f"Failed to initialize {name} provider: {e}")
            continue
        logger.info(f"Initialized {name} provider (key {mask_key(api_key)})")

    return MappingProxyType(backends)
