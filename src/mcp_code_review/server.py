"""MCP tool definitions for the code review server."""
import json
import logging
from typing import Any, Optional
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp_code_review.errors import ReviewError
from mcp_code_review.models.request import ReviewRequest, SourceType
from mcp_code_review.models.review import ReviewResponse
from mcp_code_review.review.engine import ReviewEngine


logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-code-review"


def format_review_response(response: ReviewResponse) -> dict[str, Any]:
    """Tool payload: optional fields and zero counts are left out."""
    findings = []
    for finding in response.findings:
        item: dict[str, Any] = {
            "category": finding.category.value,
            "severity": finding.severity.value,
            "description": finding.description,
            "suggestion": finding.suggestion,
        }
        if finding.line is not None:
            item["line"] = finding.line
        if finding.file_path:
            item["file_path"] = finding.file_path
        if finding.code_snippet:
            item["code_snippet"] = finding.code_snippet
        findings.append(item)

    result: dict[str, Any] = {
        "findings": findings,
        "summary": response.summary,
        "provider": response.provider,
        "duration_ms": response.duration_ms,
    }

    if response.metadata is not None:
        metadata: dict[str, Any] = {"source_type": response.metadata.source_type}
        if response.metadata.model:
            metadata["model"] = response.metadata.model
        for key in ("file_count", "line_count", "lines_added", "lines_removed"):
            value = getattr(response.metadata, key)
            if value > 0:
                metadata[key] = value
        result["metadata"] = metadata

    return result


def register_tools(mcp: FastMCP, engine: ReviewEngine) -> None:
    """Register the four review tools on the given FastMCP server instance."""

    async def run_review(tool_name: str, request: ReviewRequest) -> str:
        logger.info(f"Handling {tool_name} request")
        try:
            response = await engine.review(request)
        except ReviewError as e:
            logger.error(f"Tool {tool_name} failed: {e}")
            # FastMCP turns ToolError into an isError tool result
            raise ToolError(f"Review failed: {e}") from e
        return json.dumps(format_review_response(response), indent=2)

    @mcp.tool()
    async def review_code(
        code: str,
        language: str,
        provider: str = "",
        review_depth: str = "quick",
        focus_areas: Optional[list[str]] = None,
    ) -> str:
        """Review arbitrary code snippet for quality, security, and best practices.

        Args:
            code: Code to review
            language: Programming language (e.g., go, python, javascript)
            provider: LLM provider to use: anthropic, openai or google
                      (defaults to the server default)
            review_depth: Review depth: quick or thorough
            focus_areas: Categories to focus on: bug, security, performance,
                         style, best-practice
        """
        return await run_review("review_code", ReviewRequest(
            source_type=SourceType.ARBITRARY.value,
            code=code,
            provider=provider,
            language=language,
            review_depth=review_depth,
            focus_areas=focus_areas or [],
        ))

    @mcp.tool()
    async def review_staged(
        repository_path: str,
        provider: str = "",
        review_depth: str = "quick",
    ) -> str:
        """Review git staged changes in a repository.

        Args:
            repository_path: Path to git repository
            provider: LLM provider to use: anthropic, openai or google
            review_depth: Review depth: quick or thorough
        """
        return await run_review("review_staged", ReviewRequest(
            source_type=SourceType.STAGED.value,
            repository_path=repository_path,
            provider=provider,
            review_depth=review_depth,
        ))

    @mcp.tool()
    async def review_unstaged(
        repository_path: str,
        provider: str = "",
        review_depth: str = "quick",
    ) -> str:
        """Review git unstaged changes in a repository.

        Args:
            repository_path: Path to git repository
            provider: LLM provider to use: anthropic, openai or google
            review_depth: Review depth: quick or thorough
        """
        return await run_review("review_unstaged", ReviewRequest(
            source_type=SourceType.UNSTAGED.value,
            repository_path=repository_path,
            provider=provider,
            review_depth=review_depth,
        ))

    @mcp.tool()
    async def review_commit(
        repository_path: str,
        commit_sha: str,
        provider: str = "",
        review_depth: str = "quick",
    ) -> str:
        """Review a specific git commit.

        Args:
            repository_path: Path to git repository
            commit_sha: Git commit SHA to review
            provider: LLM provider to use: anthropic, openai or google
            review_depth: Review depth: quick or thorough
        """
        return await run_review("review_commit", ReviewRequest(
            source_type=SourceType.COMMIT.value,
            repository_path=repository_path,
            commit_sha=commit_sha,
            provider=provider,
            review_depth=review_depth,
        ))


def create_server(engine: ReviewEngine) -> FastMCP:
    """Create and configure the FastMCP server instance."""
    mcp = FastMCP(SERVER_NAME)
    register_tools(mcp, engine)
    return mcp
