from .request import ReviewRequest, SourceType, ReviewDepth
from .review import Category, Finding, ReviewMetadata, ReviewResponse, Severity

__all__ = [
    "ReviewRequest",
    "SourceType",
    "ReviewDepth",
    "Category",
    "Finding",
    "ReviewMetadata",
    "ReviewResponse",
    "Severity",
]
