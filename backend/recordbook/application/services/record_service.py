"""Application service (use case) for Record operations."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from recordbook.application.interfaces import RecordRepository, SORTABLE_FIELDS
from recordbook.application.schemas.record import RecordCreate, RecordUpdate
from recordbook.domain.entities import Record
from recordbook.domain.exceptions import EntityNotFoundError, RepositoryError
from recordbook.domain.results import InternalError, NotFound, Ok, Result, ValidationFailed
from recordbook.domain.validation import sanitize_record_data, validate_record_data

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 8
DEFAULT_SORT_FIELD = "name"
DEFAULT_SORT_ORDER = "asc"

RECORD_NOT_FOUND = "No record found with the specified ID"

# API sort keys -> entity attribute names
_SORT_ALIASES = {
    "recordDate": "record_date",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

FILTERABLE_FIELDS: tuple[str, ...] = ("state", "district", "city", "zipcode")


@dataclass
class RecordListing:
    """A page of records together with its pagination metadata."""

    records: list[Record]
    total_records: int
    total_pages: int
    current_page: int
    page_size: int


def resolve_sort_field(sort_by: str | None) -> str:
    """Map an API sort key to a sortable attribute, defaulting to ``name``."""
    field = _SORT_ALIASES.get(sort_by or "", sort_by or "")
    if field not in SORTABLE_FIELDS:
        if sort_by:
            logger.debug("Unknown sort field '%s', falling back to '%s'", sort_by, DEFAULT_SORT_FIELD)
        return DEFAULT_SORT_FIELD
    return field


class RecordService:
    """Orchestrates record CRUD logic. Depends on the repository port (DI)."""

    def __init__(self, repository: RecordRepository):
        self._repository = repository

    async def list_records(
        self,
        *,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: str = "",
        sort_by: str = DEFAULT_SORT_FIELD,
        sort_order: str = DEFAULT_SORT_ORDER,
    ) -> RecordListing:
        search = (search or "").strip()
        total = await self._repository.count(search=search)
        records = await self._repository.search(
            search=search,
            sort_by=resolve_sort_field(sort_by),
            descending=sort_order != "asc",
            skip=(page - 1) * page_size,
            limit=page_size,
        )
        return RecordListing(
            records=records,
            total_records=total,
            total_pages=math.ceil(total / page_size),
            current_page=page,
            page_size=page_size,
        )

    async def get_record(self, record_id: str) -> Ok[Record] | NotFound:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            return NotFound(RECORD_NOT_FOUND)
        return Ok(record)

    async def create_record(self, data: RecordCreate) -> Result[Record]:
        values = _normalize_dates(sanitize_record_data(data.to_changes()))
        if values.get("record_date") is None:
            values["record_date"] = datetime.now(timezone.utc)

        errors = validate_record_data(values)
        if errors:
            logger.info("Rejected new record: %s", ", ".join(sorted(errors)))
            return ValidationFailed(errors)

        record = Record(**values)
        record.normalize_phone()
        try:
            created = await self._repository.create(record)
        except RepositoryError:
            logger.exception("Failed to persist new record")
            return InternalError("Failed to create record")
        logger.info("Created record %s", created.id)
        return Ok(created)

    async def update_record(self, record_id: str, data: RecordUpdate) -> Result[Record]:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            return NotFound(RECORD_NOT_FOUND)

        changes = _normalize_dates(sanitize_record_data(data.to_changes()))
        merged: dict[str, Any] = {**_record_values(record), **changes}
        errors = validate_record_data(merged)
        if errors:
            logger.info("Rejected update of record %s: %s", record_id, ", ".join(sorted(errors)))
            return ValidationFailed(errors)

        if record.apply(changes):
            record.normalize_phone()
        try:
            updated = await self._repository.update(record)
        except EntityNotFoundError:
            return NotFound(RECORD_NOT_FOUND)
        except RepositoryError:
            logger.exception("Failed to update record %s", record_id)
            return InternalError("Failed to update record")
        logger.info("Updated record %s", record_id)
        return Ok(updated)

    async def delete_record(self, record_id: str) -> Ok[str] | NotFound | InternalError:
        try:
            deleted = await self._repository.delete(record_id)
        except RepositoryError:
            logger.exception("Failed to delete record %s", record_id)
            return InternalError("Failed to delete record")
        if not deleted:
            return NotFound(RECORD_NOT_FOUND)
        logger.info("Deleted record %s", record_id)
        return Ok("Record deleted successfully")

    async def count_records(self) -> int:
        return await self._repository.count()

    async def list_by_field(self, field: str, value: str) -> list[Record]:
        """Records whose ``field`` (state, district, city or zipcode) contains ``value``."""
        if field not in FILTERABLE_FIELDS:
            raise ValueError(f"Cannot filter records by '{field}'")
        return await self._repository.find_by_field(field, value.strip())

    async def list_by_date_range(self, start: datetime, end: datetime) -> list[Record]:
        return await self._repository.find_by_date_range(as_utc(start), as_utc(end))


def _record_values(record: Record) -> dict[str, Any]:
    return {
        "name": record.name,
        "phone": record.phone,
        "email": record.email,
        "address": record.address,
        "state": record.state,
        "district": record.district,
        "city": record.city,
        "zipcode": record.zipcode,
        "record_date": record.record_date,
    }


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _normalize_dates(values: dict[str, Any]) -> dict[str, Any]:
    record_date = values.get("record_date")
    if isinstance(record_date, datetime):
        values["record_date"] = as_utc(record_date)
    return values
