# src/mcp_code_review/providers/gemini.py
import time
import httpx
from mcp_code_review.models.request import ReviewRequest
from mcp_code_review.models.review import ReviewResponse
from mcp_code_review.errors import BackendInvocationError
from mcp_code_review.review.prompts import build_metadata, build_review_prompt, parse_review_response
from .base import NON_RETRYABLE_STATUS, ReviewBackend


class GeminiProvider(ReviewBackend):
    MODEL = "gemini-2.0-flash"
    API_URL = f"https://generativelanguage.googleapis.com/v1beta/models/{MODEL}:generateContent"

    def __init__(self, api_key: str, timeout: float = 90.0):
        if not api_key:
            raise ValueError("google API key is required")
        self.api_key = api_key
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "google"

    def is_available(self) -> bool:
        return bool(self.api_key)

    async def review(self, request: ReviewRequest) -> ReviewResponse:
        start = time.monotonic()
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.API_URL,
                    # Header rather than ?key= so the key stays out of logged URLs
                    headers={"x-goog-api-key": self.api_key},
                    json={
                        "contents": [{
                            "parts": [{"text": build_review_prompt(request)}]
                        }]
                    },
                    timeout=self.timeout,
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise BackendInvocationError(f"google API call timed out after {self.timeout:g}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise BackendInvocationError(
                f"google API error: HTTP {status}",
                retryable=status not in NON_RETRYABLE_STATUS,
            ) from e
        except httpx.HTTPError as e:
            raise BackendInvocationError(f"google API error: {e}") from e

        try:
            data = response.json()
            parts = data["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise BackendInvocationError(f"google API returned an unexpected payload: {e}") from e

        text = "".join(part.get("text", "") for part in parts)
        findings, summary = parse_review_response(text)

        return ReviewResponse(
            findings=findings,
            summary=summary,
            provider=self.name,
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata=build_metadata(request, self.MODEL),
        )
