from .record import (
    DeleteResult,
    ErrorResponse,
    RecordCount,
    RecordCreate,
    RecordInput,
    RecordPage,
    RecordResponse,
    RecordUpdate,
)

__all__ = [
    "DeleteResult",
    "ErrorResponse",
    "RecordCount",
    "RecordCreate",
    "RecordInput",
    "RecordPage",
    "RecordResponse",
    "RecordUpdate",
]
