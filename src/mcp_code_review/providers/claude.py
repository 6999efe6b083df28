# src/mcp_code_review/providers/claude.py
import logging
import time
import anthropic
from anthropic import AsyncAnthropic
from mcp_code_review.models.request import ReviewRequest
from mcp_code_review.models.review import ReviewResponse
from mcp_code_review.errors import BackendInvocationError
from mcp_code_review.review.prompts import (
    build_metadata,
    build_system_prompt,
    build_user_prompt,
    parse_review_response,
)
from .base import NON_RETRYABLE_STATUS, ReviewBackend


logger = logging.getLogger(__name__)


class ClaudeProvider(ReviewBackend):
    MODEL = "claude-sonnet-4-5"
    MAX_TOKENS = 4096

    def __init__(self, api_key: str, timeout: float = 90.0):
        if not api_key:
            raise ValueError("anthropic API key is required")
        self.timeout = timeout
        # Retries belong to the review engine
        self.client = AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)

    @property
    def name(self) -> str:
        return "anthropic"

    def is_available(self) -> bool:
        return self.client is not None

    async def review(self, request: ReviewRequest) -> ReviewResponse:
        start = time.monotonic()
        try:
            message = await self.client.messages.create(
                model=self.MODEL,
                max_tokens=self.MAX_TOKENS,
                system=build_system_prompt(request),
                messages=[{"role": "user", "content": build_user_prompt(request)}],
            )
        except anthropic.APITimeoutError as e:
            raise BackendInvocationError(f"anthropic API call timed out after {self.timeout:g}s") from e
        except anthropic.APIStatusError as e:
            raise BackendInvocationError(
                f"anthropic API error: {e}",
                retryable=e.status_code not in NON_RETRYABLE_STATUS,
            ) from e
        except anthropic.APIError as e:
            raise BackendInvocationError(f"anthropic API error: {e}") from e

        text = "".join(block.text for block in message.content if block.type == "text")
        logger.info(f"Anthropic response length: {len(text)} chars")
        findings, summary = parse_review_response(text)

        return ReviewResponse(
            findings=findings,
            summary=summary,
            provider=self.name,
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata=build_metadata(request, self.MODEL),
        )
