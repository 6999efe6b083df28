from enum import Enum
from pydantic import BaseModel, Field


class SourceType(str, Enum):
    ARBITRARY = "arbitrary"
    STAGED = "staged"
    UNSTAGED = "unstaged"
    COMMIT = "commit"


class ReviewDepth(str, Enum):
    QUICK = "quick"
    THOROUGH = "thorough"


class ReviewRequest(BaseModel):
    """A single review invocation.

    Fields stay plain strings so that malformed values reach
    ``validate_request`` instead of failing at construction time.
    """
    source_type: str = ""
    code: str = ""
    provider: str = ""
    language: str = ""
    review_depth: str = ""
    focus_areas: list[str] = Field(default_factory=list)
    repository_path: str = ""
    commit_sha: str = ""

    @property
    def is_git_source(self) -> bool:
        return self.source_type in (
            SourceType.STAGED.value,
            SourceType.UNSTAGED.value,
            SourceType.COMMIT.value,
        )
