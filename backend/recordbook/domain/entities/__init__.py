from .record import RECORD_FIELDS, Record, format_phone, phone_digits

__all__ = [
    "RECORD_FIELDS",
    "Record",
    "format_phone",
    "phone_digits",
]
