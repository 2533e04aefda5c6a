from __future__ import annotations

import logging
import re
from typing import Callable

from .models import CardResult, FieldValue, ParsedContact, ParseReport
from .policies import best_address, best_email, best_phone, latest_note
from .utils import decode_value, property_matches, split_property_line

log = logging.getLogger(__name__)

UNKNOWN_CONTACT = "Unknown Contact"

_MISSING_NAMES = {"null", "undefined"}

_VCARD_PRESENT = re.compile(r"BEGIN:VCARD.*END:VCARD", re.S)
_CARD_DELIMITER = re.compile(r"(?:BEGIN|END):VCARD[^\S\n]*(?:\n|\Z)", re.I)
_HAS_FN = re.compile(r"^[^\S\n]*FN:", re.M)


class VCFParserError(ValueError):
    """The whole file was rejected."""


class CardParseError(VCFParserError):
    """A single card could not be parsed; the rest of the file is unaffected."""


def validate_content(text: str) -> bool:
    """Cheap gate: True if a BEGIN:VCARD marker is followed later by END:VCARD."""
    return isinstance(text, str) and bool(_VCARD_PRESENT.search(text))


def split_cards(text: str) -> list[str]:
    """Split *text* into card bodies, dropping fragments without an FN line.

    Raises VCFParserError when no candidate card survives.
    """
    cards = [
        block.strip()
        for block in _CARD_DELIMITER.split(text)
        if block.strip() and _HAS_FN.search(block)
    ]
    if not cards:
        raise VCFParserError("No valid vCards found in the file")
    return cards


def resolve_name(fn: str, n: str) -> str:
    """Pick a display name from FN, falling back to the structured N value."""
    if fn and fn not in _MISSING_NAMES:
        return fn

    if n:
        # Last;First;Middle;Prefix;Suffix
        parts = n.split(";")
        if len(parts) >= 2:
            first = parts[1].strip()
            last = parts[0].strip()
            if first and last:
                return f"{first} {last}"
            if first or last:
                return first or last

    return UNKNOWN_CONTACT


class _CardFields:
    """Per-card accumulator fed line by line."""

    def __init__(self) -> None:
        self.fn = ""
        self.n = ""
        self.tel: FieldValue | None = None
        self.email: FieldValue | None = None
        self.adr: FieldValue | None = None
        self.note: FieldValue | None = None

    def set_fn(self, candidate: FieldValue) -> None:
        self.fn = candidate.value

    def set_n(self, candidate: FieldValue) -> None:
        self.n = candidate.value

    def add_tel(self, candidate: FieldValue) -> None:
        self.tel = best_phone(self.tel, candidate)

    def add_email(self, candidate: FieldValue) -> None:
        self.email = best_email(self.email, candidate)

    def add_adr(self, candidate: FieldValue) -> None:
        self.adr = best_address(self.adr, candidate)

    def add_note(self, candidate: FieldValue) -> None:
        self.note = latest_note(self.note, candidate)

    def to_contact(self) -> ParsedContact:
        return ParsedContact(
            name=resolve_name(self.fn, self.n),
            phone=_value_or_none(self.tel),
            email=_value_or_none(self.email),
            address=_value_or_none(self.adr),
            notes=_value_or_none(self.note),
        )


def _value_or_none(candidate: FieldValue | None) -> str | None:
    if candidate is None or not candidate.value:
        return None
    return candidate.value


# First matching prefix wins; FN must be checked before N.
FIELD_HANDLERS: list[tuple[str, Callable[[_CardFields, FieldValue], None]]] = [
    ("FN", _CardFields.set_fn),
    ("N", _CardFields.set_n),
    ("TEL", _CardFields.add_tel),
    ("EMAIL", _CardFields.add_email),
    ("ADR", _CardFields.add_adr),
    ("NOTE", _CardFields.add_note),
]


def parse_card(body: str) -> ParsedContact:
    """Extract a contact from one card body.

    Raises CardParseError if the body has no ``KEY:value`` line at all.
    """
    fields = _CardFields()
    recognised = False

    for line in (raw.strip() for raw in body.split("\n")):
        if not line:
            continue
        split = split_property_line(line)
        if split is None:
            continue
        recognised = True
        key, value = split
        candidate = FieldValue(value=decode_value(value), raw=line)
        for prefix, handler in FIELD_HANDLERS:
            if property_matches(key, prefix):
                handler(fields, candidate)
                break

    if not recognised:
        raise CardParseError("Card has no property lines")
    return fields.to_contact()


def extract_card(index: int, body: str) -> CardResult:
    try:
        contact = parse_card(body)
    except CardParseError as exc:
        return CardResult(index=index, reason=str(exc))
    if not contact.has_contact_data():
        return CardResult(index=index, reason="Card has no name, phone or email")
    return CardResult(index=index, contact=contact)


def parse_vcf_report(text: str) -> ParseReport:
    """Parse vCard text, keeping the skipped cards alongside the contacts.

    Raises VCFParserError for non-string or empty input, when no candidate
    card is found, or when every candidate card was skipped.
    """
    if not text or not isinstance(text, str):
        raise VCFParserError("Invalid VCF content provided")

    cards = split_cards(text)
    report = ParseReport()
    for index, body in enumerate(cards):
        result = extract_card(index, body)
        if result.ok:
            report.contacts.append(result.contact)
        else:
            log.warning("Skipping malformed vCard at index %d: %s", index, result.reason)
            report.skipped.append(result)

    log.debug(
        "Parsed %d card(s): %d contact(s), %d skipped",
        len(cards), len(report.contacts), len(report.skipped),
    )
    if not report.contacts:
        raise VCFParserError("No valid contacts found in VCF file")
    return report


def parse_vcf(text: str) -> list[ParsedContact]:
    return parse_vcf_report(text).contacts


__all__ = [
    "UNKNOWN_CONTACT",
    "FIELD_HANDLERS",
    "VCFParserError",
    "CardParseError",
    "validate_content",
    "split_cards",
    "resolve_name",
    "parse_card",
    "extract_card",
    "parse_vcf_report",
    "parse_vcf",
]
