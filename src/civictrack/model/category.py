"""Category vocabularies and the mappings between them.

``Category`` is the canonical set used by the classifier and by every
computation in the package. ``ReportCategory`` is the coarser vocabulary
stored on issue records by the reporting form.
"""
from __future__ import annotations

from enum import StrEnum

from civictrack.errors import InvalidArgumentError


class Category(StrEnum):
    ROAD = "Road"
    SANITATION = "Sanitation"
    STREETLIGHT = "Streetlight"
    WATER_SUPPLY = "Water Supply"
    ELECTRICITY = "Electricity"
    DRAINAGE = "Drainage"
    PUBLIC_SAFETY = "Public Safety"
    OTHER = "Other"


class ReportCategory(StrEnum):
    ROADS = "roads"
    LIGHTING = "lighting"
    WATER = "water"
    CLEANLINESS = "cleanliness"
    SAFETY = "safety"
    OBSTRUCTIONS = "obstructions"


REPORT_CATEGORY_LABELS: dict[ReportCategory, str] = {
    ReportCategory.ROADS: "Roads & Potholes",
    ReportCategory.LIGHTING: "Lighting",
    ReportCategory.WATER: "Water Supply",
    ReportCategory.CLEANLINESS: "Cleanliness & Garbage",
    ReportCategory.SAFETY: "Public Safety",
    ReportCategory.OBSTRUCTIONS: "Obstructions & Trees",
}

_TO_CANONICAL: dict[ReportCategory, Category] = {
    ReportCategory.ROADS: Category.ROAD,
    ReportCategory.LIGHTING: Category.STREETLIGHT,
    ReportCategory.WATER: Category.WATER_SUPPLY,
    ReportCategory.CLEANLINESS: Category.SANITATION,
    ReportCategory.SAFETY: Category.PUBLIC_SAFETY,
    ReportCategory.OBSTRUCTIONS: Category.OTHER,
}

_TO_REPORT: dict[Category, ReportCategory] = {
    Category.ROAD: ReportCategory.ROADS,
    Category.STREETLIGHT: ReportCategory.LIGHTING,
    Category.ELECTRICITY: ReportCategory.LIGHTING,
    Category.WATER_SUPPLY: ReportCategory.WATER,
    Category.DRAINAGE: ReportCategory.WATER,
    Category.SANITATION: ReportCategory.CLEANLINESS,
    Category.PUBLIC_SAFETY: ReportCategory.SAFETY,
    Category.OTHER: ReportCategory.OBSTRUCTIONS,
}


def to_canonical(value: Category | ReportCategory | str) -> Category:
    """Map any known category name onto the canonical ``Category`` set.

    Accepts canonical names ("Water Supply") and report ids ("water").
    Raises InvalidArgumentError for anything else.
    """
    if isinstance(value, Category):
        return value
    if isinstance(value, ReportCategory):
        return _TO_CANONICAL[value]
    try:
        return Category(value)
    except ValueError:
        pass
    try:
        return _TO_CANONICAL[ReportCategory(value)]
    except ValueError:
        raise InvalidArgumentError(f"unknown category: {value!r}") from None


def to_report_category(category: Category | str) -> ReportCategory:
    """Map a canonical category onto the report vocabulary."""
    return _TO_REPORT[to_canonical(category)]


def parse_report_category(value: ReportCategory | str) -> ReportCategory:
    """Parse a report category id, raising InvalidArgumentError if unknown."""
    try:
        return ReportCategory(value)
    except ValueError:
        raise InvalidArgumentError(f"unknown report category: {value!r}") from None
