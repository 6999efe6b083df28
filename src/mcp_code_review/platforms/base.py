from abc import ABC, abstractmethod


class VCSClient(ABC):
    """Source of diff text for git-based reviews."""

    @abstractmethod
    async def staged_diff(self) -> str:
        pass

    @abstractmethod
    async def unstaged_diff(self) -> str:
        pass

    @abstractmethod
    async def commit_diff(self, commit_sha: str) -> str:
        """Return the diff of one commit. Must call validate_commit first."""
        pass

    @abstractmethod
    async def validate_commit(self, commit_sha: str) -> None:
        pass

    @abstractmethod
    async def is_repository(self) -> bool:
        pass
