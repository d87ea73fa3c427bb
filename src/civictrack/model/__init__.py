from __future__ import annotations

from civictrack.model.category import (
    REPORT_CATEGORY_LABELS,
    Category,
    ReportCategory,
    to_canonical,
    to_report_category,
)
from civictrack.model.classification import Classification, Urgency
from civictrack.model.coordinate import Coordinate
from civictrack.model.issue import Issue, IssueStatus, RankedIssue

__all__ = [
    # coordinate
    "Coordinate",
    # category
    "Category",
    "ReportCategory",
    "REPORT_CATEGORY_LABELS",
    "to_canonical",
    "to_report_category",
    # issue
    "IssueStatus",
    "Issue",
    "RankedIssue",
    # classification
    "Urgency",
    "Classification",
]
