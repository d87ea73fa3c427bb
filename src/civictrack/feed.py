"""Public feed assembly: caller predicates first, then distance ranking."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from civictrack.geo import filter_by_distance
from civictrack.model.category import ReportCategory
from civictrack.model.coordinate import Coordinate
from civictrack.model.issue import Issue, IssueStatus, RankedIssue

DISTANCE_OPTIONS: tuple[int, ...] = (1, 3, 5)
DEFAULT_RADIUS_KM = 5.0


@dataclass(frozen=True)
class FeedFilters:
    search: str = ""
    categories: tuple[ReportCategory, ...] = ()
    statuses: tuple[IssueStatus, ...] = ()
    radius_km: float = DEFAULT_RADIUS_KM
    hide_flagged: bool = True


def matches_search(issue: Issue, term: str) -> bool:
    """Case-insensitive substring match on title or description."""
    if not term:
        return True
    needle = term.lower()
    return needle in issue.title.lower() or needle in issue.description.lower()


def _keep(issue: Issue, filters: FeedFilters) -> bool:
    if filters.hide_flagged and issue.flagged:
        return False
    if filters.categories and issue.category not in filters.categories:
        return False
    if filters.statuses and issue.status not in filters.statuses:
        return False
    return matches_search(issue, filters.search)


def build_feed(
    issues: Iterable[Issue],
    center: Coordinate,
    filters: FeedFilters | None = None,
) -> list[RankedIssue]:
    """Return the issues visible on the feed, nearest first."""
    filters = filters or FeedFilters()
    candidates = [issue for issue in issues if _keep(issue, filters)]
    return filter_by_distance(candidates, center, filters.radius_km)
