"""Pydantic DTOs (Data Transfer Objects) for the Record feature.

JSON bodies use camelCase (``recordDate``, ``totalRecords``); Python code
uses snake_case. Input DTOs are deliberately loose: field rules live in
``recordbook.domain.validation`` so they yield a field-error map instead of
a framework validation error.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
)


class RecordInput(BaseModel):
    """Fields a client may send when creating or updating a record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    name: str | None = Field(None, examples=["Asha Verma"])
    phone: str | None = Field(None, examples=["9876543210"])
    email: str | None = Field(None, examples=["asha.verma@example.in"])
    address: str | None = Field(None, examples=["14 MG Road, Near City Mall"])
    state: str | None = Field(None, examples=["Karnataka"])
    district: str | None = Field(None, examples=["Bengaluru Urban"])
    city: str | None = Field(None, examples=["Bengaluru"])
    zipcode: str | None = Field(None, examples=["560001"])
    record_date: datetime | None = None

    def to_changes(self) -> dict[str, Any]:
        """Only the fields present in the request body, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class RecordCreate(RecordInput):
    """Schema for creating a new record."""


class RecordUpdate(RecordInput):
    """Schema for updating a record — only the fields sent are replaced."""


class RecordResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    name: str
    phone: str
    email: str
    address: str
    state: str
    district: str
    city: str
    zipcode: str
    record_date: datetime
    created_at: datetime
    updated_at: datetime
    formatted_phone: str
    formatted_record_date: str


class RecordPage(BaseModel):
    """One page of a filtered, sorted record listing."""

    model_config = _CAMEL_CONFIG

    records: list[RecordResponse]
    total_records: int
    total_pages: int
    current_page: int
    page_size: int


class RecordCount(BaseModel):
    count: int


class DeleteResult(BaseModel):
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error: str
    message: str
    details: dict[str, str] | None = None
