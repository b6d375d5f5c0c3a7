# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "body"


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Context for a 400 response: offending field names plus one entry per problem."""

    problems = [
        {
            "field": _field_path(err.get("loc", ())),
            "type": err.get("type", "value_error"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    fields = sorted({p["field"] for p in problems if p["field"] != "body"})
    return {"fields": fields, "errors": problems}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
