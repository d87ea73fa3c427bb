from __future__ import annotations

import os
from dataclasses import dataclass

from civictrack.classifier.remote import (
    DEFAULT_API_URL,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT,
    RemoteClassifier,
)
from civictrack.errors import InvalidArgumentError
from civictrack.feed import DEFAULT_RADIUS_KM
from civictrack.model.coordinate import Coordinate


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidArgumentError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class CivicTrackConfig:
    classifier_url: str = DEFAULT_API_URL
    classifier_api_key: str = ""
    classifier_model: str = DEFAULT_MODEL
    classifier_temperature: float = DEFAULT_TEMPERATURE
    request_timeout: float = DEFAULT_TIMEOUT
    default_radius_km: float = DEFAULT_RADIUS_KM
    fallback_location: Coordinate | None = None
    issues_path: str = ""  # JSON export of the issues table
    host: str = "127.0.0.1"
    port: int = 5000

    @classmethod
    def from_env(cls) -> CivicTrackConfig:
        """Create config from CIVICTRACK_* environment variables.

        The API key falls back to OPENAI_API_KEY. A fallback location is set
        only when both CIVICTRACK_FALLBACK_LAT and CIVICTRACK_FALLBACK_LNG are.
        """
        fallback = None
        lat = os.environ.get("CIVICTRACK_FALLBACK_LAT", "").strip()
        lng = os.environ.get("CIVICTRACK_FALLBACK_LNG", "").strip()
        if lat and lng:
            fallback = Coordinate(
                lat=_env_float("CIVICTRACK_FALLBACK_LAT", 0.0),
                lng=_env_float("CIVICTRACK_FALLBACK_LNG", 0.0),
            )

        return cls(
            classifier_url=os.environ.get("CIVICTRACK_CLASSIFIER_URL", DEFAULT_API_URL),
            classifier_api_key=os.environ.get(
                "CIVICTRACK_CLASSIFIER_API_KEY", os.environ.get("OPENAI_API_KEY", "")
            ),
            classifier_model=os.environ.get("CIVICTRACK_CLASSIFIER_MODEL", DEFAULT_MODEL),
            request_timeout=_env_float("CIVICTRACK_REQUEST_TIMEOUT", DEFAULT_TIMEOUT),
            default_radius_km=_env_float("CIVICTRACK_DEFAULT_RADIUS_KM", DEFAULT_RADIUS_KM),
            fallback_location=fallback,
            issues_path=os.environ.get("CIVICTRACK_ISSUES_PATH", ""),
        )

    def remote_classifier(self) -> RemoteClassifier | None:
        """Build the remote classifier, or None when no API key is configured."""
        if not self.classifier_api_key:
            return None
        return RemoteClassifier(
            self.classifier_url,
            self.classifier_api_key,
            model=self.classifier_model,
            temperature=self.classifier_temperature,
            timeout=self.request_timeout,
        )
