from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from civictrack.assistant import reply
from civictrack.classifier import classify_issue
from civictrack.errors import (
    ClassificationError,
    InvalidArgumentError,
    LocationUnavailableError,
)
from civictrack.feed import FeedFilters, build_feed
from civictrack.geo import resolve_center
from civictrack.model.category import REPORT_CATEGORY_LABELS, parse_report_category, to_canonical
from civictrack.model.coordinate import Coordinate
from civictrack.model.issue import IssueStatus
from civictrack.stats import average_response_days, category_breakdown, compute_stats

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.after_request
def add_cors_headers(response):
    """Allow cross-origin requests to the API."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


@api_bp.errorhandler(InvalidArgumentError)
def handle_invalid_argument(exc: InvalidArgumentError):
    return jsonify({"error": str(exc)}), 400


@api_bp.errorhandler(LocationUnavailableError)
def handle_location_unavailable(exc: LocationUnavailableError):
    return jsonify({"error": str(exc)}), 422


@api_bp.errorhandler(ClassificationError)
def handle_classification_error(exc: ClassificationError):
    logger.warning("Classification request failed: %s", exc)
    return jsonify({"error": str(exc)}), 502


def _float_arg(name: str) -> float | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise InvalidArgumentError(f"{name} must be a number, got {raw!r}") from None


def _status_arg(values: list[str]) -> tuple[IssueStatus, ...]:
    try:
        return tuple(IssueStatus(value) for value in values)
    except ValueError as exc:
        raise InvalidArgumentError(str(exc)) from None


@api_bp.route("/issues/nearby")
def nearby_issues():
    """Issues within the requested radius of a point, nearest first."""
    config = current_app.extensions["civictrack_config"]
    lat = _float_arg("lat")
    lng = _float_arg("lng")
    if (lat is None) != (lng is None):
        raise InvalidArgumentError("lat and lng must be given together")
    location = Coordinate(lat=lat, lng=lng) if lat is not None else None
    center = resolve_center(location, config.fallback_location)

    radius = _float_arg("radius")
    filters = FeedFilters(
        search=request.args.get("search", ""),
        categories=tuple(parse_report_category(c) for c in request.args.getlist("category")),
        statuses=_status_arg(request.args.getlist("status")),
        radius_km=config.default_radius_km if radius is None else radius,
        hide_flagged=request.args.get("include_flagged", "false").lower() != "true",
    )

    ranked = build_feed(current_app.extensions["issue_source"].fetch(), center, filters)
    return jsonify({
        "center": center.to_dict(),
        "degraded": location is None,
        "radius_km": filters.radius_km,
        "count": len(ranked),
        "issues": [item.to_dict() for item in ranked],
    })


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgumentError("JSON object body required")
    return data


@api_bp.route("/classify", methods=["OPTIONS"])
@api_bp.route("/assistant", methods=["OPTIONS"])
def preflight():
    """Handle CORS preflight for POST endpoints."""
    return "", 204


@api_bp.route("/classify", methods=["POST"])
def classify():
    """Classify a draft report.

    Uses the remote classifier when one is configured. ``fallback: true``
    asks for the keyword rules if the remote call fails.
    """
    data = _json_body()
    if "title" not in data:
        return jsonify({"error": "title required"}), 400

    fallback = data.get("fallback", False)
    if not isinstance(fallback, bool):
        raise InvalidArgumentError("fallback must be a boolean")

    remote = current_app.extensions["remote_classifier"]
    classification = classify_issue(
        data["title"],
        data.get("description", ""),
        data.get("location"),
        remote=remote,
        fallback_to_local=fallback,
    )
    return jsonify(classification.to_dict())


@api_bp.route("/assistant", methods=["POST"])
def assistant():
    """Reply to a chat message from the reporting assistant."""
    data = _json_body()
    message = data.get("message")
    if not isinstance(message, str) or not message.strip():
        return jsonify({"error": "message required"}), 400
    return jsonify({"response": reply(message, current_app.extensions["remote_classifier"])})


@api_bp.route("/stats")
def stats():
    """Dashboard counts across every issue."""
    issues = current_app.extensions["issue_source"].fetch()
    return jsonify({
        "stats": compute_stats(issues).to_dict(),
        "categories": [
            {"id": str(category), "count": count}
            for category, count in category_breakdown(issues)
        ],
        "average_response_days": average_response_days(issues),
    })


@api_bp.route("/categories")
def categories():
    """Report categories with their labels and canonical classifier category."""
    return jsonify([
        {"id": str(category), "label": label, "canonical": str(to_canonical(category))}
        for category, label in REPORT_CATEGORY_LABELS.items()
    ])
