"""Client side of the Record Book: API wrappers, dashboard controller, record form."""

from .api_client import ApiClient, ApiError, LocationApi, RecordsApi
from .dashboard import PAGE_SIZES, DashboardController, DashboardState
from .record_form import RecordForm, format_phone_input

__all__ = [
    "ApiClient",
    "ApiError",
    "LocationApi",
    "RecordsApi",
    "PAGE_SIZES",
    "DashboardController",
    "DashboardState",
    "RecordForm",
    "format_phone_input",
]
