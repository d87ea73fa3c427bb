"""Deterministic keyword classification.

Rules are checked in table order against the lowercased title and the
lowercased description; the first rule with a keyword in either field wins.
"""
from __future__ import annotations

from dataclasses import dataclass

from civictrack.errors import InvalidArgumentError
from civictrack.model.category import Category
from civictrack.model.classification import Classification, Urgency

SUMMARY_CHARS = 50
BASE_TAGS = ("civic", "community")


@dataclass(frozen=True)
class ClassificationRule:
    keywords: tuple[str, ...]
    category: Category
    urgency: Urgency

    def matches(self, *fields: str) -> bool:
        return any(keyword in field for field in fields for keyword in self.keywords)


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(("pothole", "road"), Category.ROAD, Urgency.MEDIUM),
    ClassificationRule(("light", "dark"), Category.STREETLIGHT, Urgency.MEDIUM),
    ClassificationRule(("water", "leak"), Category.WATER_SUPPLY, Urgency.HIGH),
    ClassificationRule(("garbage", "trash", "clean"), Category.SANITATION, Urgency.LOW),
    ClassificationRule(("electric", "power"), Category.ELECTRICITY, Urgency.HIGH),
    ClassificationRule(("drain", "flood"), Category.DRAINAGE, Urgency.MEDIUM),
    ClassificationRule(("safety", "danger", "unsafe"), Category.PUBLIC_SAFETY, Urgency.HIGH),
)

DEFAULT_CATEGORY = Category.OTHER
DEFAULT_URGENCY = Urgency.MEDIUM


def require_input(title: str, description: str) -> None:
    """Reject a blank title or a whitespace-only description.

    An empty description is accepted.
    """
    if not isinstance(title, str) or not title.strip():
        raise InvalidArgumentError("title must be a non-empty string")
    if not isinstance(description, str):
        raise InvalidArgumentError("description must be a string")
    if description and not description.strip():
        raise InvalidArgumentError("description must not be whitespace-only")


def match_rule(title: str, description: str) -> tuple[Category, Urgency]:
    """Return the category and urgency of the first matching rule."""
    fields = (title.lower(), description.lower())
    for rule in RULES:
        if rule.matches(*fields):
            return rule.category, rule.urgency
    return DEFAULT_CATEGORY, DEFAULT_URGENCY


def classify_local(title: str, description: str) -> Classification:
    """Classify an issue using the keyword rules.

    The summary always ends in "..." even when the description is shorter
    than the truncation width.
    """
    require_input(title, description)

    category, urgency = match_rule(title, description)
    return Classification(
        category=category,
        suggested_title=f"{category}: {title}",
        summary=f"{category} issue reported: {description[:SUMMARY_CHARS]}...",
        tags=(category.lower(), *BASE_TAGS),
        urgency=urgency,
    )
