# src/mcp_code_review/main.py
import logging
import os
import sys
from functools import lru_cache
from pydantic import ValidationError

from mcp_code_review.config import LEGACY_ENV_VARS, Settings
from mcp_code_review.credentials import validate_all
from mcp_code_review.providers import build_registry
from mcp_code_review.review.engine import ReviewEngine
from mcp_code_review.server import create_server


logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str) -> None:
    # stdout carries the MCP stdio protocol, so logs go to stderr
    logging.basicConfig(
        level=LOG_LEVELS.get(level, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    for name in ("httpx", "httpcore", "anthropic", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def build_engine(settings: Settings) -> ReviewEngine:
    registry = build_registry(settings)
    if settings.default_provider not in registry:
        logger.warning(f"Default provider {settings.default_provider} is not configured")
    return ReviewEngine(
        providers=registry,
        default_provider=settings.default_provider,
        max_diff_size=settings.max_diff_size,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
        review_timeout=settings.review_timeout,
    )


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        raise SystemExit(1) from e

    configure_logging(settings.log_level)

    for old, new in LEGACY_ENV_VARS.items():
        if os.environ.get(old) and not os.environ.get(new):
            logger.warning(f"Environment variable {old} is deprecated, use {new} instead")

    try:
        validate_all(settings)
    except ValueError as e:
        logger.error(f"Invalid API credentials: {e}")
        raise SystemExit(1) from e

    engine = build_engine(settings)
    if not engine.providers:
        logger.error(
            "No LLM providers available. Set at least one of "
            "ANTHROPIC_API_KEY, OPENAI_API_KEY, GOOGLE_API_KEY"
        )
        raise SystemExit(1)

    logger.info(
        f"Review engine initialized: providers={engine.list_backends()} "
        f"default={settings.default_provider} max_diff_size={settings.max_diff_size}"
    )

    server = create_server(engine)
    logger.info("Starting MCP server on stdio")
    server.run()
    logger.info("MCP Code Review Server shutting down")


if __name__ == "__main__":
    main()
