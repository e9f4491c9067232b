"""Domain entity — pure Python business object for an address-book record."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

_NON_DIGITS = re.compile(r"\D")

# Record dates are shown on the Indian calendar day (IST, no DST).
DISPLAY_TZ = timezone(timedelta(hours=5, minutes=30), "IST")

# Fields a client may set; everything else is server-managed.
RECORD_FIELDS: tuple[str, ...] = (
    "name",
    "phone",
    "email",
    "address",
    "state",
    "district",
    "city",
    "zipcode",
    "record_date",
)


def phone_digits(phone: str) -> str:
    """Strip every non-digit character from a phone value."""
    return _NON_DIGITS.sub("", phone or "")


def format_phone(phone: str) -> str:
    """Return ``(DDD)-DDD-DDDD`` for a 10-digit phone, else the value unchanged."""
    digits = phone_digits(phone)
    if len(digits) == 10:
        return f"({digits[:3]})-{digits[3:6]}-{digits[6:]}"
    return phone


@dataclass
class Record:
    """Core domain entity for a single address-book entry with Indian address fields."""

    name: str
    phone: str
    email: str
    address: str
    state: str
    district: str
    city: str
    zipcode: str
    record_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def formatted_phone(self) -> str:
        return format_phone(self.phone)

    @property
    def formatted_record_date(self) -> str:
        """Record date in Indian ``DD/MM/YYYY`` form, on the IST calendar day."""
        if self.record_date is None:
            return ""
        value = self.record_date
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(DISPLAY_TZ).strftime("%d/%m/%Y")

    def normalize_phone(self) -> None:
        """Rewrite the phone into display format when it holds exactly 10 digits."""
        self.phone = format_phone(self.phone)

    def apply(self, changes: dict[str, Any]) -> bool:
        """Overwrite the given fields and refresh updated_at.

        Returns True when the phone value was among the changed fields.
        """
        phone_changed = False
        for name, value in changes.items():
            if name not in RECORD_FIELDS:
                continue
            if name == "phone" and value != self.phone:
                phone_changed = True
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)
        return phone_changed
