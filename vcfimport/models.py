from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .types import ContactPayload


@dataclass
class FieldValue:
    """A candidate for a multi-valued field: decoded value plus the raw line it came from."""

    value: str
    raw: str = ""


@dataclass
class ParsedContact:
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    def has_contact_data(self) -> bool:
        return bool(self.name or self.phone or self.email)

    def to_dict(self) -> "ContactPayload":
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "notes": self.notes,
        }


@dataclass
class CardResult:
    """Outcome of extracting one card: either a contact or the reason it was skipped."""

    index: int
    contact: Optional[ParsedContact] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.contact is not None


@dataclass
class ParseReport:
    contacts: List[ParsedContact] = field(default_factory=list)
    skipped: List[CardResult] = field(default_factory=list)
