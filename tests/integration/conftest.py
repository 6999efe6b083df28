# tests/integration/conftest.py
import pytest


def pytest_collection_modifyitems(items):
    """Mark everything under integration/ (HTTP mocks, git, MCP transport)."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
