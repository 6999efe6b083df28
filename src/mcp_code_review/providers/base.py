# src/mcp_code_review/providers/base.py
from abc import ABC, abstractmethod
from mcp_code_review.models.request import ReviewRequest
from mcp_code_review.models.review import ReviewResponse


# HTTP statuses a retry cannot fix (bad request, credentials, unknown model)
NON_RETRYABLE_STATUS = frozenset({400, 401, 403, 404})


class ReviewBackend(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name, e.g. "anthropic"."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    async def review(self, request: ReviewRequest) -> ReviewResponse:
        """Send the request to the LLM and return the parsed review.

        Failures are raised as BackendInvocationError.
        """
        pass
