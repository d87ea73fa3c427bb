"""Issue classification: keyword rules and remote delegation."""
from __future__ import annotations

from civictrack.classifier.remote import RemoteClassifier, parse_classification
from civictrack.classifier.rules import RULES, ClassificationRule, classify_local
from civictrack.errors import ClassificationError
from civictrack.model.classification import Classification


def classify_issue(
    title: str,
    description: str,
    location: str | None = None,
    *,
    remote: RemoteClassifier | None = None,
    fallback_to_local: bool = False,
) -> Classification:
    """Classify with ``remote`` when given, otherwise with the keyword rules.

    A remote failure is re-raised unless the caller opts into
    ``fallback_to_local``.
    """
    if remote is None:
        return classify_local(title, description)
    try:
        return remote.classify(title, description, location)
    except ClassificationError:
        if not fallback_to_local:
            raise
        return classify_local(title, description)


__all__ = [
    "RULES",
    "ClassificationRule",
    "RemoteClassifier",
    "classify_issue",
    "classify_local",
    "parse_classification",
]
