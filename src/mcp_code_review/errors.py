# src/mcp_code_review/errors.py


class ReviewError(Exception):
    """Base class for every failure the review engine reports."""
    kind = "review"


class RequestValidationError(ReviewError):
    kind = "validation"

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule


class SourceFetchError(ReviewError):
    kind = "source_fetch"


class InvalidCommitError(SourceFetchError):
    def __init__(self, commit_sha: str, detail: str = ""):
        message = f"invalid commit SHA {commit_sha}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.commit_sha = commit_sha


class SizeLimitExceededError(ReviewError):
    kind = "size_limit"

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"diff size ({size} bytes) exceeds maximum allowed size ({limit} bytes). "
            "Consider reviewing smaller changes or increasing MCP_PR_MAX_DIFF_SIZE"
        )
        self.size = size
        self.limit = limit


class BackendNotFoundError(ReviewError):
    kind = "backend_not_found"

    def __init__(self, backend: str):
        super().__init__(f"provider {backend} not found")
        self.backend = backend


class BackendUnavailableError(ReviewError):
    kind = "backend_unavailable"

    def __init__(self, backend: str):
        super().__init__(f"provider {backend} not available")
        self.backend = backend


class BackendInvocationError(ReviewError):
    """Raised by backends. ``retryable=False`` marks failures a retry cannot fix."""
    kind = "backend_invocation"

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


class RetriesExhaustedError(ReviewError):
    kind = "backend_invocation"

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"review failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class ReviewCancelledError(ReviewError):
    kind = "cancelled"
