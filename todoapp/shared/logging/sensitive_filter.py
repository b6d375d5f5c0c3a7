# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction applied to every log record before it reaches a sink."""

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # key=value style secrets
    (
        re.compile(r"((?:jwt[_-]?)?secret(?:[_-]?key)?\s*[:=]\s*['\"]?)([^'\"\s,]{8,})", re.I),
        rf"\1{_MASK}",
    ),
    (re.compile(r"((?:password|passwd)\s*[:=]\s*['\"]?)([^'\"\s,]{6,})", re.I), rf"\1{_MASK}"),
    (
        re.compile(r"((?:refresh|access)?_?token\s*[:=]\s*['\"]?)([\w\-.]{20,})", re.I),
        rf"\1{_MASK}",
    ),
    # Authorization: Bearer <jwt>
    (re.compile(r"(bearer\s+)([\w\-.]{20,})", re.I), rf"\1{_MASK}"),
    (re.compile(r"(authorization\s*:\s*['\"]?)([^'\"\s]{10,})", re.I), rf"\1{_MASK}"),
    # bare JWTs
    (re.compile(r"\beyJ[\w\-]+\.[\w\-]+\.[\w\-]+"), "***JWT***"),
    # user:password@host in database URLs
    (
        re.compile(r"\b((?:postgres(?:ql)?|mysql|mariadb)(?:\+\w+)?://[^:/\s]+:)([^@\s]+)@"),
        rf"\1{_MASK}@",
    ),
    # e-mail local part
    (re.compile(r"\b[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})\b"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru filter: rewrites the message in place and never drops a record."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["sanitize_message", "sanitize_record"]
