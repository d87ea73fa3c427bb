"""Great-circle distance and radius filtering over issues."""
from __future__ import annotations

import math
from collections.abc import Iterable

from civictrack.errors import InvalidArgumentError, LocationUnavailableError
from civictrack.model.coordinate import Coordinate
from civictrack.model.issue import Issue, RankedIssue

EARTH_RADIUS_KM = 6371.0

# Distances below this are treated as zero when the radius is zero.
DISTANCE_TOLERANCE_KM = 1e-9


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates in kilometers."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(max(0.0, h))))


def filter_by_distance(
    issues: Iterable[Issue],
    center: Coordinate,
    radius_km: float,
) -> list[RankedIssue]:
    """Return the issues within ``radius_km`` of ``center``, nearest first.

    The boundary is inclusive and ties keep their input order.
    Raises InvalidArgumentError for a negative or non-finite radius.
    """
    if isinstance(radius_km, bool) or not isinstance(radius_km, (int, float)):
        raise InvalidArgumentError(f"radius must be a number, got {radius_km!r}")
    if not math.isfinite(radius_km) or radius_km < 0:
        raise InvalidArgumentError(f"radius must be a non-negative number, got {radius_km!r}")

    limit = radius_km if radius_km > 0 else DISTANCE_TOLERANCE_KM
    ranked = []
    for issue in issues:
        d = distance(center, issue.coordinates)
        if d <= limit:
            ranked.append(RankedIssue(issue=issue, distance=d))
    ranked.sort(key=lambda r: r.distance)
    return ranked


def resolve_center(
    location: Coordinate | LocationUnavailableError | None,
    fallback: Coordinate | None = None,
) -> Coordinate:
    """Pick the reference coordinate for ranking.

    ``location`` is what the geolocation collaborator produced: a coordinate,
    ``None``, or the LocationUnavailableError it failed with. When it is not
    a coordinate the caller's ``fallback`` is used; without one the failure
    is raised.
    """
    if isinstance(location, Coordinate):
        return location
    if fallback is not None:
        return fallback
    if isinstance(location, LocationUnavailableError):
        raise location
    raise LocationUnavailableError("no location available and no fallback configured")
