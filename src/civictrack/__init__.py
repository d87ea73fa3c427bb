"""CivicTrack: ranking and classification for civic issue reports."""
from __future__ import annotations

from civictrack.classifier import classify_issue, classify_local
from civictrack.config import CivicTrackConfig
from civictrack.geo import distance, filter_by_distance, resolve_center

__all__ = [
    "CivicTrackConfig",
    "classify_issue",
    "classify_local",
    "distance",
    "filter_by_distance",
    "resolve_center",
]
