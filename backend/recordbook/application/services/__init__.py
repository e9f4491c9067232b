from .location_service import LocationService
from .record_service import RecordListing, RecordService

__all__ = [
    "LocationService",
    "RecordListing",
    "RecordService",
]
