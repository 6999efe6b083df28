from enum import Enum
from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    BUG = "bug"
    SECURITY = "security"
    PERFORMANCE = "performance"
    STYLE = "style"
    BEST_PRACTICE = "best-practice"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


# Spellings models tend to use instead of the canonical tag
_CATEGORY_ALIASES = {
    "bugs": Category.BUG,
    "best-practices": Category.BEST_PRACTICE,
    "best_practice": Category.BEST_PRACTICE,
    "best_practices": Category.BEST_PRACTICE,
    "readability": Category.STYLE,
}


class Finding(BaseModel):
    category: Category
    severity: Severity
    line: int | None = None
    file_path: str | None = None
    description: str
    suggestion: str = ""
    code_snippet: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value):
        if isinstance(value, Category):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _CATEGORY_ALIASES:
                return _CATEGORY_ALIASES[key]
            if key in Category._value2member_map_:
                return Category(key)
        return Category.BEST_PRACTICE

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value):
        if isinstance(value, Severity):
            return value
        if isinstance(value, str) and value.strip().lower() in Severity._value2member_map_:
            return Severity(value.strip().lower())
        return Severity.INFO

    @field_validator("suggestion", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class ReviewMetadata(BaseModel):
    source_type: str
    model: str = ""
    file_count: int = 0
    line_count: int = 0
    lines_added: int = 0
    lines_removed: int = 0


class ReviewResponse(BaseModel):
    findings: list[Finding] = Field(default_factory=list)
    summary: str = ""
    provider: str
    duration_ms: int = 0
    metadata: ReviewMetadata | None = None
