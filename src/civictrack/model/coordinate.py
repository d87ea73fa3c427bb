from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from civictrack.errors import InvalidArgumentError


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        for name, value, bound in (("lat", self.lat, 90.0), ("lng", self.lng, 180.0)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or not -bound <= value <= bound:
                raise InvalidArgumentError(
                    f"{name} must be within [-{bound:g}, {bound:g}], got {value!r}"
                )

    @classmethod
    def from_dict(cls, data: Any) -> Coordinate:
        """Build from a ``{"lat": .., "lng": ..}`` mapping."""
        if not isinstance(data, dict) or "lat" not in data or "lng" not in data:
            raise InvalidArgumentError(f"coordinates must have lat and lng, got {data!r}")
        return cls(lat=data["lat"], lng=data["lng"])

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}
