# tests/conftest.py
import asyncio
import os
import pytest
from mcp_code_review.errors import BackendInvocationError
from mcp_code_review.models.review import Category, Finding, ReviewResponse, Severity
from mcp_code_review.providers.base import ReviewBackend


class FakeBackend(ReviewBackend):
    """Backend double that fails the first ``failures`` calls."""

    def __init__(self, name="fake", failures=0, error=None, available=True, delay=0.0):
        self._name = name
        self.failures = failures
        self.error = error or BackendInvocationError("backend exploded")
        self.available = available
        self.delay = delay
        self.calls = 0
        self.requests = []
        self.started = asyncio.Event()

    @property
    def name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return self.available

    async def review(self, request):
        self.calls += 1
        self.requests.append(request.model_copy())
        self.started.set()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.calls <= self.failures:
            raise self.error
        return ReviewResponse(
            findings=[
                Finding(
                    category=Category.BUG,
                    severity=Severity.HIGH,
                    line=3,
                    description="Possible None dereference",
                    suggestion="Check for None first",
                )
            ],
            summary="One issue found",
            provider=self._name,
        )


@pytest.fixture
def isolated_settings(monkeypatch, tmp_path):
    """Keep Settings() away from the caller's environment, .env and mcp-review.yaml."""
    for name in list(os.environ):
        if name.startswith("MCP_") or name.endswith(("_API_KEY", "_TIMEOUT")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_backend():
    return FakeBackend
