"""Read-only issue sources standing in for the data-access layer."""
from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from civictrack.errors import InvalidArgumentError
from civictrack.model.issue import Issue


class IssueSource(Protocol):
    """Protocol for anything that can hand over the current issue list."""

    def fetch(self) -> tuple[Issue, ...]:
        ...


class StaticIssueSource:
    """Serves a fixed, in-memory list of issues."""

    def __init__(self, issues: Iterable[Issue] = ()) -> None:
        self._issues = tuple(issues)

    def fetch(self) -> tuple[Issue, ...]:
        return self._issues


class JSONIssueSource:
    """Reads issues from a JSON file holding an array of issue records.

    The file is re-read on every ``fetch()`` so edits show up without a
    restart.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def fetch(self) -> tuple[Issue, ...]:
        """Raises FileNotFoundError if the file does not exist."""
        if not self._path.exists():
            raise FileNotFoundError(f"Issue file not found: {self._path}")

        try:
            records = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise InvalidArgumentError(f"{self._path}: invalid JSON: {exc}", cause=exc) from exc
        if not isinstance(records, list):
            raise InvalidArgumentError(f"{self._path}: expected a JSON array of issues")

        issues: list[Issue] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise InvalidArgumentError(f"{self._path}: record {index} is not an object")
            try:
                issues.append(Issue.from_dict(record))
            except InvalidArgumentError as exc:
                raise InvalidArgumentError(
                    f"{self._path}: record {index}: {exc}", cause=exc
                ) from exc
        return tuple(issues)
