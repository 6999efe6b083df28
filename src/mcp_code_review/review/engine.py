# src/mcp_code_review/review/engine.py
import asyncio
import logging
import time
from collections.abc import Mapping
from types import MappingProxyType
from mcp_code_review.models.request import ReviewRequest
from mcp_code_review.models.review import ReviewResponse
from mcp_code_review.providers.base import ReviewBackend
from mcp_code_review.errors import (
    BackendInvocationError,
    BackendNotFoundError,
    BackendUnavailableError,
    RequestValidationError,
    RetriesExhaustedError,
    ReviewCancelledError,
    SizeLimitExceededError,
    SourceFetchError,
)
from .source import SourceResolver
from .validation import validate_request


class ReviewEngine:
    """Runs one review: validate, resolve source, size check, pick backend, invoke with retry."""

    def __init__(
        self,
        providers: Mapping[str, ReviewBackend],
        default_provider: str,
        max_diff_size: int,
        max_retries: int = 1,
        retry_delay: float = 1.0,
        review_timeout: float | None = None,
        resolver: SourceResolver | None = None,
        logger: logging.Logger | None = None,
    ):
        self.providers = MappingProxyType(dict(providers))
        self.default_provider = default_provider
        self.max_diff_size = max_diff_size
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.review_timeout = review_timeout
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or SourceResolver(logger=self.logger)

    async def review(self, request: ReviewRequest, timeout: float | None = None) -> ReviewResponse:
        """Review ``request`` and return the backend's response.

        ``timeout`` overrides the engine's review deadline for this call.
        Expiry raises ReviewCancelledError; cancelling the calling task
        propagates CancelledError. Neither is retried.
        """
        start = time.monotonic()
        deadline = timeout if timeout is not None else self.review_timeout

        try:
            validate_request(request, self.default_provider)
        except RequestValidationError as e:
            self.logger.error(f"Invalid review request: {e}")
            raise

        try:
            async with asyncio.timeout(deadline):
                backend = await self._prepare(request)
                response = await self._invoke_with_retry(backend, request)
        except TimeoutError as e:
            if deadline is None:
                raise
            self.logger.error(f"Review deadline of {deadline:g}s expired")
            raise ReviewCancelledError(f"review cancelled: deadline of {deadline:g}s expired") from e
        except asyncio.CancelledError:
            self.logger.error("Review cancelled by caller")
            raise

        response.duration_ms = int((time.monotonic() - start) * 1000)
        self.logger.info(
            f"Review completed: provider={backend.name} "
            f"findings={len(response.findings)} duration_ms={response.duration_ms}"
        )
        return response

    async def _prepare(self, request: ReviewRequest) -> ReviewBackend:
        try:
            await self.resolver.resolve(request)
        except SourceFetchError as e:
            self.logger.error(f"Failed to get git diff: {e}")
            raise

        size = len(request.code.encode("utf-8"))
        if size > self.max_diff_size:
            self.logger.error(f"Diff too large: size_bytes={size} max_size_bytes={self.max_diff_size}")
            raise SizeLimitExceededError(size, self.max_diff_size)

        backend = self._select_backend(request)
        self.logger.info(
            f"Starting code review: provider={backend.name} source_type={request.source_type} "
            f"language={request.language} review_depth={request.review_depth} code_size_bytes={size}"
        )
        return backend

    def _select_backend(self, request: ReviewRequest) -> ReviewBackend:
        name = request.provider or self.default_provider
        backend = self.providers.get(name)
        if backend is None:
            self.logger.error(f"Provider not found: {name}")
            raise BackendNotFoundError(name)
        if not backend.is_available():
            self.logger.error(f"Provider not available: {name}")
            raise BackendUnavailableError(name)
        return backend

    async def _invoke_with_retry(self, backend: ReviewBackend, request: ReviewRequest) -> ReviewResponse:
        max_attempts = self.max_retries + 1
        attempts = 0
        last_error: Exception | None = None

        for attempt in range(max_attempts):
            if attempt > 0:
                self.logger.info(f"Retrying review: attempt={attempt} max_retries={self.max_retries}")
                await asyncio.sleep(self.retry_delay * attempt)

            attempts = attempt + 1
            try:
                response = await backend.review(request)
            except Exception as e:
                last_error = e
                self.logger.warning(
                    f"Review attempt {attempts}/{max_attempts} failed: provider={backend.name} error={e}"
                )
                if isinstance(e, BackendInvocationError) and not e.retryable:
                    break
                continue

            self.logger.info(f"Review request completed: provider={backend.name} attempt={attempts}")
            return response

        self.logger.error(
            f"Review failed after retries: provider={backend.name} attempts={attempts} error={last_error}"
        )
        raise RetriesExhaustedError(attempts, last_error) from last_error

    def get_backend(self, name: str) -> ReviewBackend | None:
        return self.providers.get(name)

    def list_backends(self) -> list[str]:
        """Names of registered backends that report themselves available."""
        return [name for name, backend in self.providers.items() if backend.is_available()]
