"""Tie-break rules for properties that may repeat within one card.

Each policy folds a new candidate against the currently held one and returns
the value to keep.
"""

from __future__ import annotations

from .models import FieldValue

MOBILE_MARKERS = ("cell", "mobile")
PREFERRED_MARKER = "pref"


def _held(current: FieldValue | None) -> bool:
    return current is not None and bool(current.value)


def is_mobile(candidate: FieldValue) -> bool:
    text = candidate.raw.lower()
    return any(marker in text for marker in MOBILE_MARKERS)


def is_preferred(candidate: FieldValue) -> bool:
    return PREFERRED_MARKER in candidate.raw.lower()


def best_phone(current: FieldValue | None, new: FieldValue) -> FieldValue:
    """Mobile numbers win; otherwise the first number seen is kept."""
    if not _held(current):
        return new
    if is_mobile(current):
        return current
    if is_mobile(new):
        return new
    return current


def best_email(current: FieldValue | None, new: FieldValue) -> FieldValue:
    """The first preferred address wins; without one, the latest address wins."""
    if not _held(current):
        return new
    if is_preferred(current):
        return current
    return new


def best_address(current: FieldValue | None, new: FieldValue) -> FieldValue:
    return current if _held(current) else new


def latest_note(current: FieldValue | None, new: FieldValue) -> FieldValue:
    return new


__all__ = [
    "MOBILE_MARKERS",
    "PREFERRED_MARKER",
    "is_mobile",
    "is_preferred",
    "best_phone",
    "best_email",
    "best_address",
    "latest_note",
]
