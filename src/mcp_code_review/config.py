# src/mcp_code_review/config.py
import re
from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


# Legacy name -> current name
LEGACY_ENV_VARS = {
    "MCP_LOG_LEVEL": "MCP_PR_LOG_LEVEL",
    "MCP_DEFAULT_PROVIDER": "MCP_PR_DEFAULT_PROVIDER",
    "MCP_REVIEW_TIMEOUT": "MCP_PR_REVIEW_TIMEOUT",
    "MCP_MAX_DIFF_SIZE": "MCP_PR_MAX_DIFF_SIZE",
}

_DURATION = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        yaml_file="mcp-review.yaml",
        extra="ignore",
        populate_by_name=True,
    )

    # LLM Providers
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None
    google_api_key: str | None = None

    # Server
    log_level: str = Field(
        default="info",
        validation_alias=AliasChoices("MCP_PR_LOG_LEVEL", "MCP_LOG_LEVEL"),
    )
    default_provider: str = Field(
        default="anthropic",
        validation_alias=AliasChoices("MCP_PR_DEFAULT_PROVIDER", "MCP_DEFAULT_PROVIDER"),
    )
    # No overall deadline unless configured; per-backend timeouts still apply
    review_timeout: float | None = Field(
        default=None,
        validation_alias=AliasChoices("MCP_PR_REVIEW_TIMEOUT", "MCP_REVIEW_TIMEOUT"),
    )
    max_diff_size: int = Field(
        default=10000,
        validation_alias=AliasChoices("MCP_PR_MAX_DIFF_SIZE", "MCP_MAX_DIFF_SIZE"),
    )

    # Retry policy
    max_retries: int = Field(default=1, ge=0, validation_alias="MCP_PR_MAX_RETRIES")
    retry_delay: float = Field(default=1.0, ge=0, validation_alias="MCP_PR_RETRY_DELAY")

    # Per-provider timeouts
    anthropic_timeout: float = 90.0
    openai_timeout: float = 90.0
    google_timeout: float = 90.0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator(
        "review_timeout", "anthropic_timeout", "openai_timeout", "google_timeout", mode="before"
    )
    @classmethod
    def _parse_duration(cls, value):
        """Accept plain seconds or Go-style durations such as ``90s`` or ``2m``."""
        if isinstance(value, str):
            match = _DURATION.match(value)
            if not match:
                raise ValueError(f"invalid duration: {value!r}")
            number, unit = match.groups()
            return float(number) * _UNIT_SECONDS[unit or "s"]
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def check_api_keys(self):
        if not (self.anthropic_api_key or self.openai_api_key or self.google_api_key):
            raise ValueError(
                "at least one provider API key must be configured "
                "(ANTHROPIC_API_KEY, OPENAI_API_KEY, or GOOGLE_API_KEY)"
            )
        return self

    def api_key_for(self, provider: str) -> str | None:
        return {
            "anthropic": self.anthropic_api_key,
            "openai": self.openai_api_key,
            "google": self.google_api_key,
        }.get(provider)

    def has_provider(self, provider: str) -> bool:
        return bool(self.api_key_for(provider))
