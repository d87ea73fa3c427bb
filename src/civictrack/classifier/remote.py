"""Classification delegated to an OpenAI-compatible chat-completions endpoint."""
from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from civictrack.classifier.prompts import build_request_body
from civictrack.classifier.rules import require_input
from civictrack.errors import (
    ClassificationShapeFailure,
    ClassificationTransportFailure,
    transport_failure_from_status,
)
from civictrack.model.category import Category
from civictrack.model.classification import Classification, Urgency

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_TIMEOUT = 60.0

_STRING_FIELDS = ("category", "suggested_title", "summary")


def parse_classification(payload: Any) -> Classification:
    """Validate a decoded response object and build a Classification.

    Raises ClassificationShapeFailure listing every problem found. Nothing
    is coerced: a field of the wrong type fails the whole response.
    """
    if not isinstance(payload, dict):
        raise ClassificationShapeFailure(
            "classification must be a JSON object",
            errors=["top-level value is not an object"],
            raw=payload,
        )

    errors: list[str] = []
    for key in _STRING_FIELDS:
        if not isinstance(payload.get(key), str):
            errors.append(f"{key}: expected a string")

    tags = payload.get("tags")
    if not isinstance(tags, list):
        errors.append("tags: expected an array")
    elif not all(isinstance(tag, str) for tag in tags):
        errors.append("tags: expected an array of strings")

    urgency = payload.get("urgency")
    if not isinstance(urgency, str) or urgency not in {u.value for u in Urgency}:
        errors.append(f"urgency: expected one of Low, Medium, High, got {urgency!r}")

    category = payload.get("category")
    if isinstance(category, str) and category not in {c.value for c in Category}:
        errors.append(f"category: unknown category {category!r}")

    if errors:
        raise ClassificationShapeFailure(
            "invalid classification response: " + "; ".join(errors),
            errors=errors,
            raw=payload,
        )

    return Classification(
        category=Category(category),
        suggested_title=payload["suggested_title"],
        summary=payload["summary"],
        tags=tuple(tags),
        urgency=Urgency(urgency),
    )


def extract_content(body: Any) -> str:
    """Return ``choices[0].message.content`` from a chat-completions body."""
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    if not isinstance(content, str) or not content:
        raise ClassificationTransportFailure("no response content received")
    return content


def decode_content(content: str) -> Classification:
    """Parse the model's message text as a classification object."""
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ClassificationShapeFailure(
            f"classification is not valid JSON: {exc}",
            errors=[str(exc)],
            raw=content,
            cause=exc,
        ) from exc
    return parse_classification(payload)


class RemoteClassifier:
    """Classifies issues by calling a chat-completions endpoint.

    Each call is a single POST with no retry. Every failure surfaces as a
    ClassificationError subclass; the caller decides whether to fall back
    to the local rules.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._model = model
        self._temperature = temperature
        self._client = httpx.Client(
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @property
    def model(self) -> str:
        return self._model

    def classify(
        self,
        title: str,
        description: str,
        location: str | None = None,
    ) -> Classification:
        require_input(title, description)
        body = build_request_body(
            title,
            description,
            location,
            model=self._model,
            temperature=self._temperature,
        )

        logger.info("Classification request: model=%s", self._model)
        start = time.monotonic()
        try:
            result = decode_content(extract_content(self._post(body)))
        except (ClassificationTransportFailure, ClassificationShapeFailure) as exc:
            logger.warning("Classification failed: %s", exc)
            raise
        logger.info(
            "Classification response: category=%s latency=%.2fs",
            result.category,
            time.monotonic() - start,
        )
        return result

    def _post(self, body: dict[str, Any]) -> Any:
        try:
            resp = self._client.post(self._api_url, json=body)
        except httpx.TimeoutException as exc:
            raise ClassificationTransportFailure(f"request timed out: {exc}", cause=exc) from exc
        except httpx.TransportError as exc:
            raise ClassificationTransportFailure(f"network error: {exc}", cause=exc) from exc

        if not resp.is_success:
            raise transport_failure_from_status(resp.status_code, resp.text[:200])

        try:
            return resp.json()
        except ValueError as exc:
            raise ClassificationTransportFailure(
                "response body is not JSON",
                status_code=resp.status_code,
                cause=exc,
            ) from exc

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> RemoteClassifier:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
