import json
import logging
import re
from pydantic import ValidationError
from mcp_code_review.models.request import ReviewDepth, ReviewRequest, SourceType
from mcp_code_review.models.review import Category, Finding, ReviewMetadata
from .parser import diff_stats, format_for_review, parse_diff


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are a code review assistant. Analyze the code and identify issues in these categories: {categories}.

{depth_guidance}

Return ONLY valid JSON in this exact format:
{{
  "findings": [
    {{
      "category": "bug|security|performance|style|best-practice",
      "severity": "critical|high|medium|low|info",
      "line": <line number or null>,
      "file_path": "<file path for multi-file diffs, or null>",
      "description": "<what the issue is>",
      "suggestion": "<how to fix it>",
      "code_snippet": "<relevant code excerpt, or null>"
    }}
  ],
  "summary": "<overall assessment>"
}}

Important:
- Be specific and actionable
- For diffs, only comment on changed lines and use line numbers from the NEW file
- If the code looks good, return an empty findings array"""


DEPTH_GUIDANCE = {
    ReviewDepth.QUICK.value: "Review depth: quick. Report only high-impact issues (bugs, security, serious performance problems).",
    ReviewDepth.THOROUGH.value: "Review depth: thorough. Examine every line and report all issues, including style and best-practice concerns.",
}


CODE_PROMPT = """Code to review{language_note}:
```{language}
{numbered_content}
```

Use the line numbers shown before the | symbol."""


DIFF_PROMPT = """Changes to review ({source_type} changes){language_note}:
```diff
{diff_content}
```"""


def _add_line_numbers(content: str) -> str:
    """Add line numbers to code for accurate LLM referencing."""
    lines = content.split("\n")
    width = len(str(len(lines)))
    return "\n".join(f"{i + 1:>{width}}| {line}" for i, line in enumerate(lines))


def build_system_prompt(request: ReviewRequest) -> str:
    categories = request.focus_areas or [category.value for category in Category]
    depth = request.review_depth or ReviewDepth.QUICK.value
    return SYSTEM_PROMPT.format(
        categories=", ".join(categories),
        depth_guidance=DEPTH_GUIDANCE.get(depth, DEPTH_GUIDANCE[ReviewDepth.QUICK.value]),
    )


def build_user_prompt(request: ReviewRequest) -> str:
    language_note = f" (language: {request.language})" if request.language else ""

    if request.source_type == SourceType.ARBITRARY.value:
        return CODE_PROMPT.format(
            language_note=language_note,
            language=request.language,
            numbered_content=_add_line_numbers(request.code),
        )

    files = parse_diff(request.code)
    # Fall back to the raw text when it has no file headers to structure
    diff_content = format_for_review(files) if files else request.code
    return DIFF_PROMPT.format(
        source_type=request.source_type,
        language_note=language_note,
        diff_content=diff_content.rstrip("\n"),
    )


def build_review_prompt(request: ReviewRequest) -> str:
    """Single-message prompt for backends without a separate system role."""
    return f"{build_system_prompt(request)}\n\n{build_user_prompt(request)}"


def parse_review_response(text: str) -> tuple[list[Finding], str]:
    """Extract findings and summary from an LLM reply.

    Replies that are not a JSON object are returned as the summary with no
    findings. Individual malformed findings are skipped.
    """
    payload = text
    # Extract JSON from response (may be wrapped in ```json or just ```)
    json_match = re.search(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL)
    if json_match:
        payload = json_match.group(1)

    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        logger.warning(f"LLM reply is not JSON, using it as summary ({len(text)} chars)")
        return [], text.strip()

    if not isinstance(data, dict):
        return [], text.strip()

    items = data.get("findings")
    if not isinstance(items, list):
        items = []

    findings = []
    for item in items:
        try:
            findings.append(Finding.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed finding: {e}")

    return findings, str(data.get("summary") or "")


def build_metadata(request: ReviewRequest, model: str) -> ReviewMetadata:
    metadata = ReviewMetadata(source_type=request.source_type, model=model)
    if request.source_type == SourceType.ARBITRARY.value:
        metadata.line_count = len(request.code.split("\n"))
        return metadata

    stats = diff_stats(parse_diff(request.code))
    return metadata.model_copy(update=stats)
