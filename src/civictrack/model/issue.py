from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from civictrack.errors import InvalidArgumentError
from civictrack.model.category import ReportCategory, parse_report_category
from civictrack.model.coordinate import Coordinate


class IssueStatus(StrEnum):
    REPORTED = "reported"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are taken as UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise InvalidArgumentError(f"invalid timestamp: {value!r}") from None
    if not isinstance(value, datetime):
        raise InvalidArgumentError(f"invalid timestamp: {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _parse_upvotes(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"upvotes must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Issue:
    id: str
    title: str
    description: str
    category: ReportCategory
    status: IssueStatus
    coordinates: Coordinate
    created_at: datetime
    updated_at: datetime
    upvotes: int = 0
    flagged: bool = False
    images: tuple[str, ...] = ()
    reported_by: str = ""
    is_anonymous: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", parse_timestamp(self.created_at))
        object.__setattr__(self, "updated_at", parse_timestamp(self.updated_at))
        if self.upvotes < 0:
            raise InvalidArgumentError(f"upvotes must be non-negative, got {self.upvotes}")
        if self.updated_at < self.created_at:
            raise InvalidArgumentError(
                f"issue {self.id}: updated_at precedes created_at"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        """Build an issue from a stored record."""
        missing = [
            key
            for key in ("id", "title", "description", "category", "status", "coordinates", "created_at")
            if key not in data
        ]
        if missing:
            raise InvalidArgumentError(f"issue record missing fields: {', '.join(missing)}")

        try:
            status = IssueStatus(data["status"])
        except ValueError:
            raise InvalidArgumentError(f"unknown issue status: {data['status']!r}") from None

        for key in ("title", "description"):
            if not isinstance(data[key], str):
                raise InvalidArgumentError(f"{key} must be a string, got {data[key]!r}")

        images = data.get("images") or []
        if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
            raise InvalidArgumentError(f"images must be a list of strings, got {images!r}")

        created_at = parse_timestamp(data["created_at"])
        updated_raw = data.get("updated_at")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data["description"],
            category=parse_report_category(data["category"]),
            status=status,
            coordinates=Coordinate.from_dict(data["coordinates"]),
            created_at=created_at,
            updated_at=parse_timestamp(updated_raw) if updated_raw else created_at,
            upvotes=_parse_upvotes(data.get("upvotes")),
            flagged=bool(data.get("flagged", False)),
            images=tuple(images),
            reported_by=data.get("reported_by") or "",
            is_anonymous=bool(data.get("is_anonymous", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": str(self.category),
            "status": str(self.status),
            "coordinates": self.coordinates.to_dict(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "upvotes": self.upvotes,
            "flagged": self.flagged,
            "images": list(self.images),
            "reported_by": self.reported_by,
            "is_anonymous": self.is_anonymous,
        }


@dataclass(frozen=True)
class RankedIssue:
    """An issue annotated with its distance (km) from a reference point."""

    issue: Issue
    distance: float

    def to_dict(self) -> dict[str, Any]:
        data = self.issue.to_dict()
        data["distance"] = self.distance
        return data
