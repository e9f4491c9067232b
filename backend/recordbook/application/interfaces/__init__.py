from .record_repository import RecordRepository, SEARCHABLE_FIELDS, SORTABLE_FIELDS
from .location_directory import LocationDirectory

__all__ = [
    "RecordRepository",
    "SEARCHABLE_FIELDS",
    "SORTABLE_FIELDS",
    "LocationDirectory",
]
