# tests/test_models.py
import pytest
from pydantic import ValidationError
from mcp_code_review.models import (
    Category,
    Finding,
    ReviewMetadata,
    ReviewRequest,
    ReviewResponse,
    Severity,
)


def test_review_request_defaults():
    request = ReviewRequest()

    assert request.source_type == ""
    assert request.code == ""
    assert request.focus_areas == []
    assert request.is_git_source is False


@pytest.mark.parametrize("source_type", ["staged", "unstaged", "commit"])
def test_review_request_git_sources(source_type):
    assert ReviewRequest(source_type=source_type).is_git_source


def test_review_request_keeps_unknown_values():
    # validation happens later, construction must not reject these
    request = ReviewRequest(source_type="pull_request", review_depth="deep")
    assert request.source_type == "pull_request"


def test_finding_model():
    finding = Finding(
        category="security",
        severity="critical",
        line=10,
        description="SQL injection",
        suggestion="Use parameterized queries",
    )

    assert finding.category == Category.SECURITY
    assert finding.severity == Severity.CRITICAL
    assert finding.file_path is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("bug", Category.BUG),
        ("BUG", Category.BUG),
        ("bugs", Category.BUG),
        ("best_practices", Category.BEST_PRACTICE),
        ("readability", Category.STYLE),
        ("naming", Category.BEST_PRACTICE),
        (None, Category.BEST_PRACTICE),
    ],
)
def test_finding_category_is_lenient(raw, expected):
    finding = Finding(category=raw, severity="low", description="x")
    assert finding.category == expected


@pytest.mark.parametrize("raw", ["urgent", "", None, 3])
def test_unknown_severity_becomes_info(raw):
    finding = Finding(category="bug", severity=raw, description="x")
    assert finding.severity == Severity.INFO


def test_finding_null_suggestion():
    finding = Finding(category="bug", severity="low", description="x", suggestion=None)
    assert finding.suggestion == ""


def test_finding_requires_description():
    with pytest.raises(ValidationError):
        Finding(category="bug", severity="low")


def test_review_response():
    response = ReviewResponse(
        findings=[Finding(category="style", severity="low", description="Long line")],
        summary="Minor issues",
        provider="openai",
        metadata=ReviewMetadata(source_type="arbitrary", line_count=3),
    )

    assert response.duration_ms == 0
    assert response.metadata.file_count == 0
    assert response.model_dump(mode="json")["findings"][0]["category"] == "style"
