from mcp_code_review.models.request import ReviewDepth, ReviewRequest, SourceType
from mcp_code_review.errors import RequestValidationError


_SOURCE_TYPES = {source.value for source in SourceType}
_DEPTHS = {depth.value for depth in ReviewDepth}


def validate_request(request: ReviewRequest, default_provider: str = "") -> None:
    """Check required fields against the source type.

    Rules run in a fixed order and the first failure is raised. Nothing here
    touches git or a backend.
    """
    if request.source_type not in _SOURCE_TYPES:
        raise RequestValidationError("source_type", "invalid source type")

    if request.source_type == SourceType.ARBITRARY.value and not request.code:
        raise RequestValidationError(
            "code", "code cannot be empty for arbitrary reviews"
        )

    if request.source_type != SourceType.ARBITRARY.value and not request.repository_path:
        raise RequestValidationError(
            "repository_path", "repository path is required for git-based reviews"
        )

    if request.source_type == SourceType.COMMIT.value and not request.commit_sha:
        raise RequestValidationError(
            "commit_sha", "commit SHA is required for commit reviews"
        )

    if not (request.provider or default_provider):
        raise RequestValidationError("provider", "provider must be specified")

    if request.review_depth and request.review_depth not in _DEPTHS:
        raise RequestValidationError(
            "review_depth", "review depth must be 'quick' or 'thorough'"
        )
