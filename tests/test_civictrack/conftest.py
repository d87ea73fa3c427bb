from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest

from civictrack.classifier.remote import RemoteClassifier
from civictrack.config import CivicTrackConfig
from civictrack.model.category import ReportCategory
from civictrack.model.coordinate import Coordinate
from civictrack.model.issue import Issue, IssueStatus
from civictrack.sources import StaticIssueSource
from civictrack.web.app import create_app

# Times Square; the demo location used by the reporting app.
TIMES_SQUARE = Coordinate(lat=40.7589, lng=-73.9851)


# ---------------------------------------------------------------------------
# Shared factory helpers
# ---------------------------------------------------------------------------


def make_issue(
    id: str = "iss-1",
    title: str = "Pothole on 7th Ave",
    description: str = "Deep pothole in the right lane near the crosswalk.",
    category: ReportCategory = ReportCategory.ROADS,
    status: IssueStatus = IssueStatus.REPORTED,
    lat: float = 40.7589,
    lng: float = -73.9851,
    upvotes: int = 0,
    flagged: bool = False,
    created_at: str = "2025-01-15T10:00:00+00:00",
    updated_at: str = "2025-01-15T10:00:00+00:00",
    reported_by: str = "user-1",
) -> Issue:
    return Issue(
        id=id,
        title=title,
        description=description,
        category=category,
        status=status,
        coordinates=Coordinate(lat=lat, lng=lng),
        created_at=datetime.fromisoformat(created_at),
        updated_at=datetime.fromisoformat(updated_at),
        upvotes=upvotes,
        flagged=flagged,
        reported_by=reported_by,
    )


def make_record(**overrides: Any) -> dict[str, Any]:
    """An issue record as exported from the issues table."""
    record = {
        "id": "3f1c2a9e-0000-4000-8000-000000000001",
        "title": "Broken streetlight",
        "description": "The light at the corner has been out for three days.",
        "category": "lighting",
        "status": "reported",
        "coordinates": {"lat": 40.75, "lng": -73.98},
        "images": [],
        "created_at": "2025-01-15T10:00:00+00:00",
        "updated_at": "2025-01-16T10:00:00+00:00",
        "reported_by": "user-1",
        "is_anonymous": False,
        "upvotes": 3,
        "flagged": False,
    }
    record.update(overrides)
    return record


def completion_body(content: str) -> dict[str, Any]:
    """Wrap message text in a chat-completions response body."""
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


VALID_CLASSIFICATION = {
    "category": "Streetlight",
    "suggested_title": "Streetlight Outage at Main St and Oak Ave",
    "summary": "A streetlight at Main St and Oak Ave has been out for three days.",
    "tags": ["streetlight", "outage", "night safety"],
    "urgency": "Medium",
}


def make_remote(handler, **kwargs: Any) -> RemoteClassifier:
    """A RemoteClassifier whose HTTP calls go to ``handler``."""
    return RemoteClassifier(
        "https://api.test.com/v1/chat/completions",
        "test-key",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def json_handler(payload: Any, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return handler


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def nyc_issues() -> list[Issue]:
    return [
        make_issue(id="far", title="Leaking hydrant", category=ReportCategory.WATER, lat=40.70, lng=-74.00),
        make_issue(id="near", title="Pothole on 7th Ave", lat=40.75, lng=-73.98),
        make_issue(
            id="flagged",
            title="Spam report",
            description="Buy now",
            category=ReportCategory.OBSTRUCTIONS,
            lat=40.7589,
            lng=-73.9851,
            flagged=True,
        ),
        make_issue(
            id="resolved",
            title="Overflowing trash can",
            description="Garbage bin on the corner is full",
            category=ReportCategory.CLEANLINESS,
            status=IssueStatus.RESOLVED,
            lat=40.7580,
            lng=-73.9855,
            updated_at="2025-01-17T10:00:00+00:00",
        ),
    ]


@pytest.fixture
def issues_file(tmp_path, nyc_issues):
    path = tmp_path / "issues.json"
    path.write_text(json.dumps([issue.to_dict() for issue in nyc_issues]))
    return path


@pytest.fixture
def app(nyc_issues):
    """Create a Flask app for testing, with no remote classifier."""
    application = create_app(
        source=StaticIssueSource(nyc_issues),
        config=CivicTrackConfig(fallback_location=TIMES_SQUARE),
    )
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
