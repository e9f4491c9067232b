"""Storage-independent validation rules for record data.

The same rules are mirrored client-side by ``recordbook.client.record_form``;
the server never trusts the client to have applied them.
"""

import re
from datetime import date, datetime
from typing import Any

from recordbook.domain.entities.record import phone_digits

_ZIPCODE = re.compile(r"^\d{6}$")

# Error-map keys follow the JSON field names clients send.
_PUBLIC_NAMES = {"record_date": "recordDate"}

_REQUIRED_MESSAGES = {
    "name": "Name is required",
    "phone": "Phone number is required",
    "email": "Email is required",
    "address": "Address is required",
    "state": "State is required",
    "district": "District is required",
    "city": "City is required",
    "zipcode": "Zipcode is required",
    "record_date": "Record date is required",
}

_LENGTH_RULES: dict[str, tuple[int, int, str]] = {
    "name": (2, 100, "Name"),
    "address": (10, 500, "Address"),
    "city": (2, 100, "City"),
}


def public_field_name(name: str) -> str:
    return _PUBLIC_NAMES.get(name, name)


def is_valid_phone(phone: Any) -> bool:
    return isinstance(phone, str) and len(phone_digits(phone)) == 10


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and "@" in email and "." in email and len(email) > 5


def is_valid_zipcode(zipcode: Any) -> bool:
    return isinstance(zipcode, str) and bool(_ZIPCODE.match(zipcode))


def is_valid_date(value: Any) -> bool:
    return isinstance(value, (datetime, date))


def sanitize_record_data(data: dict[str, Any]) -> dict[str, Any]:
    """Trim every string value and lower-case the email."""
    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            value = value.strip()
            if key == "email":
                value = value.lower()
        cleaned[key] = value
    return cleaned


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_record_data(data: dict[str, Any]) -> dict[str, str]:
    """Validate a complete set of record values.

    Returns a field-error map; an empty map means the data is valid.
    """
    errors: dict[str, str] = {}

    for name, message in _REQUIRED_MESSAGES.items():
        if _is_blank(data.get(name)):
            errors[public_field_name(name)] = message

    for name, (minimum, maximum, label) in _LENGTH_RULES.items():
        value = data.get(name)
        if name in errors or not isinstance(value, str):
            continue
        if len(value) < minimum:
            errors[name] = f"{label} must be at least {minimum} characters long"
        elif len(value) > maximum:
            errors[name] = f"{label} cannot exceed {maximum} characters"

    if "phone" not in errors and not is_valid_phone(data.get("phone")):
        errors["phone"] = "Phone must be exactly 10 digits"

    if "email" not in errors and not is_valid_email(data.get("email")):
        errors["email"] = "Email must contain @ and . and be at least 6 characters long"

    if "zipcode" not in errors and not is_valid_zipcode(data.get("zipcode")):
        errors["zipcode"] = "Zipcode must be exactly 6 digits"

    record_date_key = public_field_name("record_date")
    if record_date_key not in errors and not is_valid_date(data.get("record_date")):
        errors[record_date_key] = "Record date must be a valid date"

    return errors
