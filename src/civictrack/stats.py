"""Dashboard aggregates over a list of issues."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from civictrack.feed import matches_search
from civictrack.model.category import ReportCategory
from civictrack.model.issue import Issue, IssueStatus

_SECONDS_PER_DAY = 60 * 60 * 24


@dataclass(frozen=True)
class IssueStats:
    total: int = 0
    reported: int = 0
    in_progress: int = 0
    resolved: int = 0
    flagged: int = 0
    today: int = 0
    this_week: int = 0

    @property
    def resolution_rate(self) -> int:
        """Resolved issues as a whole percentage of the total."""
        if self.total == 0:
            return 0
        return round(self.resolved / self.total * 100)

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "reported": self.reported,
            "in_progress": self.in_progress,
            "resolved": self.resolved,
            "flagged": self.flagged,
            "today": self.today,
            "this_week": self.this_week,
            "resolution_rate": self.resolution_rate,
        }


def compute_stats(issues: Iterable[Issue], now: datetime | None = None) -> IssueStats:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.astimezone(timezone.utc).date()
    week_ago = now - timedelta(days=7)

    counts = dict.fromkeys(IssueStatus, 0)
    total = flagged = created_today = created_this_week = 0
    for issue in issues:
        total += 1
        counts[issue.status] += 1
        if issue.flagged:
            flagged += 1
        if issue.created_at.astimezone(timezone.utc).date() == today:
            created_today += 1
        if issue.created_at >= week_ago:
            created_this_week += 1

    return IssueStats(
        total=total,
        reported=counts[IssueStatus.REPORTED],
        in_progress=counts[IssueStatus.IN_PROGRESS],
        resolved=counts[IssueStatus.RESOLVED],
        flagged=flagged,
        today=created_today,
        this_week=created_this_week,
    )


def category_breakdown(issues: Iterable[Issue]) -> list[tuple[ReportCategory, int]]:
    """Count issues per report category, most common first."""
    counts = dict.fromkeys(ReportCategory, 0)
    for issue in issues:
        counts[issue.category] += 1
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def average_response_days(issues: Sequence[Issue]) -> float:
    """Mean days between creation and last update, to one decimal."""
    if not issues:
        return 0.0
    total_days = sum(
        abs((issue.updated_at - issue.created_at).total_seconds()) / _SECONDS_PER_DAY
        for issue in issues
    )
    return round(total_days / len(issues), 1)


def filter_issues(
    issues: Iterable[Issue],
    search: str = "",
    status: IssueStatus | str = "all",
    category: ReportCategory | str = "all",
) -> list[Issue]:
    """Admin table filter. ``"all"`` disables the status or category test."""
    result = []
    for issue in issues:
        if not matches_search(issue, search):
            continue
        if status != "all" and issue.status != status:
            continue
        if category != "all" and issue.category != category:
            continue
        result.append(issue)
    return result


def issues_by_reporter(issues: Iterable[Issue], user_id: str) -> list[Issue]:
    return [issue for issue in issues if issue.reported_by == user_id]
