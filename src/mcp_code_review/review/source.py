import logging
from collections.abc import Callable
from mcp_code_review.models.request import ReviewRequest, SourceType
from mcp_code_review.platforms.base import VCSClient
from mcp_code_review.platforms.git import LocalGitClient
from mcp_code_review.errors import SourceFetchError


class SourceResolver:
    """Fills ``request.code`` with a git diff for git-based reviews.

    Collaborator failures are wrapped in SourceFetchError and never retried.
    """

    def __init__(
        self,
        vcs_factory: Callable[[str], VCSClient] = LocalGitClient,
        logger: logging.Logger | None = None,
    ):
        self.vcs_factory = vcs_factory
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, request: ReviewRequest) -> None:
        if request.source_type == SourceType.ARBITRARY.value or request.code:
            return

        self.logger.info(
            f"Fetching git diff: source_type={request.source_type} "
            f"repository={request.repository_path}"
        )
        client = self.vcs_factory(request.repository_path)

        try:
            if not await client.is_repository():
                raise SourceFetchError(
                    f"{request.repository_path} is not a git repository"
                )

            if request.source_type == SourceType.STAGED.value:
                diff = await client.staged_diff()
            elif request.source_type == SourceType.UNSTAGED.value:
                diff = await client.unstaged_diff()
            elif request.source_type == SourceType.COMMIT.value:
                diff = await client.commit_diff(request.commit_sha)
            else:
                raise SourceFetchError(f"unsupported source type: {request.source_type}")
        except SourceFetchError:
            raise
        except Exception as e:
            raise SourceFetchError(str(e)) from e

        self.logger.info(f"Git diff fetched: {len(diff.encode('utf-8'))} bytes")
        request.code = diff
