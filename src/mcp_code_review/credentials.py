"""API key sanity checks and masking for safe logging."""
from mcp_code_review.config import Settings


MIN_KEY_LENGTH = 8
MAX_KEY_LENGTH = 512

PLACEHOLDERS = (
    "your-api-key",
    "your_api_key",
    "api-key-here",
    "placeholder",
    "xxx",
    "example",
)


class CredentialError(ValueError):
    def __init__(self, provider: str, reason: str):
        super().__init__(f"invalid credential for {provider}: {reason}")
        self.provider = provider
        self.reason = reason


def _validate_basic(provider: str, key: str) -> None:
    if not key:
        raise CredentialError(provider, "key is empty")
    if len(key) < MIN_KEY_LENGTH:
        raise CredentialError(provider, f"key too short (minimum {MIN_KEY_LENGTH} characters)")
    if len(key) > MAX_KEY_LENGTH:
        raise CredentialError(provider, f"key too long (maximum {MAX_KEY_LENGTH} characters)")
    lowered = key.lower()
    if any(placeholder in lowered for placeholder in PLACEHOLDERS):
        raise CredentialError(provider, "key appears to be a placeholder value")


def validate_anthropic_key(key: str) -> None:
    _validate_basic("Anthropic", key)
    if not key.startswith("sk-ant-"):
        raise CredentialError("Anthropic", "key should start with 'sk-ant-'")


def validate_openai_key(key: str) -> None:
    _validate_basic("OpenAI", key)
    if not key.startswith("sk-"):
        raise CredentialError("OpenAI", "key should start with 'sk-'")


def validate_google_key(key: str) -> None:
    # Google keys have no fixed prefix
    _validate_basic("Google", key)
    if " " in key:
        raise CredentialError("Google", "key should not contain spaces")


def validate_all(settings: Settings) -> None:
    """Validate every configured key, reporting all failures at once."""
    checks = (
        (settings.anthropic_api_key, validate_anthropic_key),
        (settings.openai_api_key, validate_openai_key),
        (settings.google_api_key, validate_google_key),
    )
    errors = []
    for key, check in checks:
        if not key:
            continue
        try:
            check(key)
        except CredentialError as e:
            errors.append(str(e))

    if errors:
        raise ValueError("\n".join(errors))


def mask_key(key: str | None) -> str:
    """Show only the first and last two characters of a secret."""
    if not key:
        return "<empty>"
    if len(key) <= 4:
        return "****"
    return f"{key[:2]}...{key[-2:]}"
