"""Redaction of personal data for debug logs.

Relief requests carry names and phone numbers of people in distress.
Known personal fields of a listing entry are masked outright. Phone numbers
that people typed into free-text fields (``needothers``, ``detailmed``,
``location``) are masked wherever they appear.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_PERSONAL_FIELDS: frozenset[str] = frozenset(
    {
        "requestee",
        "requestee_phone",
        "phone",
        "mobile",
        "contact",
        "email",
    }
)

# Ten to fourteen digits, optionally space-grouped, with an optional leading "+".
_PHONE_NUMBER = re.compile(r"(?<![\w+])\+?\d(?: ?\d){9,13}(?!\w)")
_MIN_PHONE_DIGITS = 10
_MAX_TEXT = 160


def mask_phone_numbers(text: str) -> str:
    """Replace phone-number-shaped digit runs in *text* with ``<phone>``."""
    return _PHONE_NUMBER.sub("<phone>", text)


def redact_request_item(item: Any) -> Any:
    """Return a log-safe rendering of one raw listing entry."""
    if isinstance(item, Mapping):
        return {str(key): _redact_field(str(key), value) for key, value in item.items()}
    return _redact_value(item)


def _redact_field(key: str, value: Any) -> Any:
    if key.lower() in _PERSONAL_FIELDS:
        return "<redacted>"
    if isinstance(value, Mapping):
        return redact_request_item(value)
    return _redact_value(value)


def _redact_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, float)):
        return value
    if isinstance(value, int):
        # Some exports store phone numbers as bare integers.
        return "<phone>" if len(str(abs(value))) >= _MIN_PHONE_DIGITS else value
    if isinstance(value, str):
        text = mask_phone_numbers(value)
        return text if len(text) <= _MAX_TEXT else f"{text[:_MAX_TEXT]}…"
    if isinstance(value, (list, tuple)):
        return f"<{type(value).__name__}:{len(value)}>"
    return f"<{type(value).__name__}>"
