# src/mcp_code_review/providers/gpt.py
import logging
import time
import openai
from openai import AsyncOpenAI
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


class GPTProvider(ReviewBackend):
    MODEL = "gpt-4o"

    def __init__(self, api_key: str, timeout: float = 90.0):
        if not api_key:
            raise ValueError("openai API key is required")
        self.timeout = timeout
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    @property
    def name(self) -> str:
        return "openai"

    def is_available(self) -> bool:
        return self.client is not None

    async def review(self, request: ReviewRequest) -> ReviewResponse:
        start = time.monotonic()
        try:
            completion = await self.client.chat.completions.create(
                model=self.MODEL,
                messages=[
                    {"role": "system", "content": build_system_prompt(request)},
                    {"role": "user", "content": build_user_prompt(request)},
                ],
            )
        except openai.APITimeoutError as e:
            raise BackendInvocationError(f"openai API call timed out after {self.timeout:g}s") from e
        except openai.APIStatusError as e:
            raise BackendInvocationError(
                f"openai API error: {e}",
                retryable=e.status_code not in NON_RETRYABLE_STATUS,
            ) from e
        except openai.APIError as e:
            raise BackendInvocationError(f"openai API error: {e}") from e

        text = ""
        if completion.choices:
            text = completion.choices[0].message.content or ""
        logger.info(f"OpenAI response length: {len(text)} chars")
        findings, summary = parse_review_response(text)

        return ReviewResponse(
            findings=findings,
            summary=summary,
            provider=self.name,
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata=build_metadata(request, self.MODEL),
        )
