from __future__ import annotations

from typing import TypedDict


class ContactPayload(TypedDict):
    name: str
    phone: str | None
    email: str | None
    address: str | None
    notes: str | None


class SkippedCardPayload(TypedDict):
    index: int
    reason: str


class PreviewPayload(TypedDict):
    contacts: list[ContactPayload]
    count: int
    skipped: list[SkippedCardPayload]
    message: str


__all__ = [
    "ContactPayload",
    "SkippedCardPayload",
    "PreviewPayload",
]
