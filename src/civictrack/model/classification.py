from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from civictrack.model.category import Category


class Urgency(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class Classification:
    category: Category
    suggested_title: str
    summary: str
    tags: tuple[str, ...]
    urgency: Urgency

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": str(self.category),
            "suggested_title": self.suggested_title,
            "summary": self.summary,
            "tags": list(self.tags),
            "urgency": str(self.urgency),
        }
