"""Turns pydantic failures into the API's ValidationError shape."""
from __future__ import annotations

from typing import Any, Iterable

from guardian.core.errors import ValidationError


def format_issues(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    issues = []
    for err in errors:
        issues.append(
            {
                "path": [part for part in err.get("loc", ()) if part != "body"],
                "message": err.get("msg", "Invalid value"),
                "code": err.get("type", "invalid"),
            }
        )
    return issues


def validation_error(errors: Iterable[dict[str, Any]]) -> ValidationError:
    return ValidationError(format_issues(errors))
