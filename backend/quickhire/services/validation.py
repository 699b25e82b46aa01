"""Field-level validation for job and application write payloads.

Both validators always return a :class:`ValidationResult`; they never raise,
even for payloads that are not mappings at all. Checks run in a fixed order so
the ``errors`` list is reproducible, and every field is checked.

When one field fails more than one check (an email made of whitespace is both
missing and malformed) every message lands in ``errors`` but ``field_errors``
keeps the first message recorded for that field.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_SCHEME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_HOST_REQUIRED_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

JOB_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "Title"),
    ("company", "Company"),
    ("location", "Location"),
    ("category", "Category"),
    ("description", "Description"),
    ("employment_type", "Employment type"),
    ("salary_range", "Salary range"),
)


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, key: str, message: str | None) -> None:
        if message is None:
            return
        self.errors.append(message)
        self.field_errors.setdefault(key, message)


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    return payload if isinstance(payload, Mapping) else {}


def _require_text(value: Any, label: str) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return f"{label} is required."
    return None


def is_absolute_url(value: str) -> bool:
    candidate = value.strip()
    if not _SCHEME_PATTERN.match(candidate):
        return False
    try:
        parts = urlsplit(candidate)
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return False
    if parts.scheme.lower() in _HOST_REQUIRED_SCHEMES:
        host = parts.hostname or ""
        return bool(host) and not any(ch.isspace() for ch in parts.netloc)
    return True


def _require_url(value: Any, label: str) -> str | None:
    missing = _require_text(value, label)
    if missing:
        return missing
    if not is_absolute_url(value):
        return f"{label} must be a valid URL."
    return None


def is_email_shaped(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value.strip()) is not None


def validate_job_payload(payload: Any) -> ValidationResult:
    data = _as_mapping(payload)
    result = ValidationResult()
    for key, label in JOB_FIELDS:
        result.add(key, _require_text(data.get(key), label))
    return result


def validate_application_payload(payload: Any) -> ValidationResult:
    data = _as_mapping(payload)
    result = ValidationResult()
    email = data.get("email")

    result.add("name", _require_text(data.get("name"), "Name"))
    result.add("email", _require_text(email, "Email"))
    result.add("resume_link", _require_url(data.get("resume_link"), "Resume link"))
    result.add("cover_note", _require_text(data.get("cover_note"), "Cover note"))

    if isinstance(email, str) and email and not is_email_shaped(email):
        result.add("email", "Email must be properly formatted.")
    return result
