from __future__ import annotations

import math

import pytest

from civictrack.errors import InvalidArgumentError, LocationUnavailableError
from civictrack.geo import EARTH_RADIUS_KM, distance, filter_by_distance, resolve_center
from civictrack.model.coordinate import Coordinate

from tests.test_civictrack.conftest import TIMES_SQUARE, make_issue

SAMPLE_POINTS = [
    Coordinate(lat=0, lng=0),
    Coordinate(lat=40.7589, lng=-73.9851),
    Coordinate(lat=51.5074, lng=-0.1278),
    Coordinate(lat=-33.8688, lng=151.2093),
    Coordinate(lat=89.9, lng=179.9),
    Coordinate(lat=-90, lng=-180),
]


# ---------------------------------------------------------------------------
# distance
# ---------------------------------------------------------------------------


class TestDistance:
    def test_one_degree_of_longitude_at_equator(self) -> None:
        expected = EARTH_RADIUS_KM * math.pi / 180
        assert distance(Coordinate(lat=0, lng=0), Coordinate(lat=0, lng=1)) == pytest.approx(expected)

    def test_antipodal_points_do_not_overshoot(self) -> None:
        d = distance(Coordinate(lat=0, lng=0), Coordinate(lat=0, lng=180))
        assert d == pytest.approx(math.pi * EARTH_RADIUS_KM)
        assert not math.isnan(d)

    def test_pole_to_pole(self) -> None:
        d = distance(Coordinate(lat=90, lng=0), Coordinate(lat=-90, lng=0))
        assert d == pytest.approx(math.pi * EARTH_RADIUS_KM)

    def test_london_to_new_york(self) -> None:
        d = distance(Coordinate(lat=51.5074, lng=-0.1278), TIMES_SQUARE)
        assert d == pytest.approx(5570, rel=0.01)

    def test_symmetric(self) -> None:
        for a in SAMPLE_POINTS:
            for b in SAMPLE_POINTS:
                assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-9, abs=1e-12)

    def test_identity_is_zero(self) -> None:
        for a in SAMPLE_POINTS:
            assert distance(a, a) == pytest.approx(0.0, abs=1e-9)

    def test_never_negative_or_nan(self) -> None:
        for a in SAMPLE_POINTS:
            for b in SAMPLE_POINTS:
                d = distance(a, b)
                assert d >= 0
                assert not math.isnan(d)


# ---------------------------------------------------------------------------
# filter_by_distance
# ---------------------------------------------------------------------------


class TestFilterByDistance:
    def test_empty_input(self) -> None:
        assert filter_by_distance([], TIMES_SQUARE, 5) == []

    def test_only_nearby_issue_within_five_km(self) -> None:
        issues = [
            make_issue(id="1", lat=40.70, lng=-74.00),
            make_issue(id="2", lat=40.75, lng=-73.98),
        ]
        ranked = filter_by_distance(issues, TIMES_SQUARE, 5)
        assert [r.issue.id for r in ranked] == ["2"]
        assert ranked[0].distance == pytest.approx(1.079, abs=0.01)
        assert distance(TIMES_SQUARE, issues[0].coordinates) > 5

    def test_sorted_nearest_first(self) -> None:
        issues = [
            make_issue(id="far", lat=40.78, lng=-73.98),
            make_issue(id="mid", lat=40.77, lng=-73.98),
            make_issue(id="near", lat=40.76, lng=-73.985),
        ]
        ranked = filter_by_distance(issues, TIMES_SQUARE, 10)
        assert [r.issue.id for r in ranked] == ["near", "mid", "far"]
        distances = [r.distance for r in ranked]
        assert distances == sorted(distances)

    def test_boundary_is_inclusive(self) -> None:
        issue = make_issue(id="edge", lat=40.70, lng=-74.00)
        radius = distance(TIMES_SQUARE, issue.coordinates)
        ranked = filter_by_distance([issue], TIMES_SQUARE, radius)
        assert [r.issue.id for r in ranked] == ["edge"]

    def test_ties_keep_input_order(self) -> None:
        issues = [
            make_issue(id="b", lat=40.75, lng=-73.98),
            make_issue(id="a", lat=40.75, lng=-73.98),
            make_issue(id="c", lat=40.7589, lng=-73.9851),
        ]
        ranked = filter_by_distance(issues, TIMES_SQUARE, 5)
        assert [r.issue.id for r in ranked] == ["c", "b", "a"]

    def test_zero_radius_keeps_only_center(self) -> None:
        issues = [
            make_issue(id="here", lat=40.7589, lng=-73.9851),
            make_issue(id="next-door", lat=40.7590, lng=-73.9851),
        ]
        ranked = filter_by_distance(issues, TIMES_SQUARE, 0)
        assert [r.issue.id for r in ranked] == ["here"]
        assert ranked[0].distance == pytest.approx(0.0, abs=1e-9)

    def test_every_result_within_radius_and_none_missing(self) -> None:
        issues = [
            make_issue(id=str(i), lat=40.70 + i * 0.01, lng=-74.02 + i * 0.005)
            for i in range(12)
        ]
        for radius in (0.5, 1, 3, 5, 8):
            ranked = filter_by_distance(issues, TIMES_SQUARE, radius)
            returned = [r.issue.id for r in ranked]
            expected = {
                issue.id for issue in issues
                if distance(TIMES_SQUARE, issue.coordinates) <= radius
            }
            assert len(returned) == len(set(returned))
            assert set(returned) == expected
            assert all(r.distance <= radius for r in ranked)

    def test_distance_annotation_matches_distance(self) -> None:
        issue = make_issue(lat=40.75, lng=-73.98)
        [ranked] = filter_by_distance([issue], TIMES_SQUARE, 5)
        assert ranked.issue is issue
        assert ranked.distance == distance(TIMES_SQUARE, issue.coordinates)

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            filter_by_distance([make_issue()], TIMES_SQUARE, -1)

    def test_negative_radius_rejected_for_empty_list(self) -> None:
        with pytest.raises(InvalidArgumentError):
            filter_by_distance([], TIMES_SQUARE, -1)

    @pytest.mark.parametrize("radius", [math.nan, math.inf, "5", None])
    def test_invalid_radius_rejected(self, radius) -> None:
        with pytest.raises(InvalidArgumentError):
            filter_by_distance([make_issue()], TIMES_SQUARE, radius)

    def test_accepts_generator(self) -> None:
        ranked = filter_by_distance((i for i in [make_issue(id="x")]), TIMES_SQUARE, 1)
        assert [r.issue.id for r in ranked] == ["x"]


# ---------------------------------------------------------------------------
# resolve_center
# ---------------------------------------------------------------------------


class TestResolveCenter:
    def test_location_wins_over_fallback(self) -> None:
        here = Coordinate(lat=1, lng=2)
        assert resolve_center(here, fallback=TIMES_SQUARE) == here

    def test_none_uses_fallback(self) -> None:
        assert resolve_center(None, fallback=TIMES_SQUARE) == TIMES_SQUARE

    def test_failure_signal_uses_fallback(self) -> None:
        failure = LocationUnavailableError("permission denied")
        assert resolve_center(failure, fallback=TIMES_SQUARE) == TIMES_SQUARE

    def test_failure_without_fallback_is_raised(self) -> None:
        failure = LocationUnavailableError("permission denied")
        with pytest.raises(LocationUnavailableError, match="permission denied"):
            resolve_center(failure)

    def test_none_without_fallback_raises(self) -> None:
        with pytest.raises(LocationUnavailableError):
            resolve_center(None)
