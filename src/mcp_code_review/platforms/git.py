import asyncio
import contextlib
import logging
from mcp_code_review.errors import InvalidCommitError
from .base import VCSClient


logger = logging.getLogger(__name__)

DIFF_TIMEOUT = 30.0
VERIFY_TIMEOUT = 10.0


class GitCommandError(Exception):
    pass


class GitTimeoutError(GitCommandError):
    pass


class LocalGitClient(VCSClient):
    def __init__(self, repo_path: str):
        self.repo_path = repo_path

    async def _run(self, args: list[str], timeout: float) -> str:
        command = "git " + " ".join(args)
        try:
            process = await asyncio.create_subprocess_exec(
                "git",
                *args,
                cwd=self.repo_path,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise GitCommandError(f"failed to run {command} in {self.repo_path}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError:
            await _kill(process)
            raise GitTimeoutError(f"{command} timed out after {timeout:g}s")
        except asyncio.CancelledError:
            await _kill(process)
            raise

        if process.returncode != 0:
            output = stderr.decode("utf-8", errors="replace").strip()
            raise GitCommandError(
                f"{command} failed with exit code {process.returncode} (output: {output})"
            )
        return stdout.decode("utf-8", errors="replace")

    async def staged_diff(self) -> str:
        return await self._run(["diff", "--staged"], DIFF_TIMEOUT)

    async def unstaged_diff(self) -> str:
        return await self._run(["diff"], DIFF_TIMEOUT)

    async def commit_diff(self, commit_sha: str) -> str:
        await self.validate_commit(commit_sha)
        return await self._run(["show", commit_sha], DIFF_TIMEOUT)

    async def validate_commit(self, commit_sha: str) -> None:
        if not commit_sha or commit_sha.startswith("-"):
            raise InvalidCommitError(commit_sha)
        try:
            await self._run(["rev-parse", "--verify", f"{commit_sha}^{{commit}}"], VERIFY_TIMEOUT)
        except GitTimeoutError:
            raise
        except GitCommandError as e:
            raise InvalidCommitError(commit_sha, str(e)) from e

    async def is_repository(self) -> bool:
        try:
            await self._run(["rev-parse", "--git-dir"], VERIFY_TIMEOUT)
        except GitTimeoutError:
            raise
        except GitCommandError as e:
            logger.debug(f"{self.repo_path} is not a git repository: {e}")
            return False
        return True


async def _kill(process: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()
