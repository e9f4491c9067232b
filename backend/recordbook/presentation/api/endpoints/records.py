"""Record CRUD endpoints."""

import re
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from recordbook.application.schemas.record import (
    DeleteResult,
    ErrorResponse,
    RecordCount,
    RecordCreate,
    RecordPage,
    RecordResponse,
    RecordUpdate,
)
from recordbook.application.services import RecordService
from recordbook.application.services.record_service import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from recordbook.domain.entities import Record
from recordbook.infrastructure.dependencies import get_record_service
from recordbook.presentation.api.errors import unwrap

router = APIRouter(prefix="/records", tags=["Records"])

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


def _to_response(record: Record) -> RecordResponse:
    return RecordResponse.model_validate(record, from_attributes=True)


def _positive_int(raw: str | None, default: int) -> int:
    """Leading integer of ``raw``; anything missing, unparsable or below 1 gives ``default``."""
    match = _LEADING_INT.match(raw or "")
    if match is None:
        return default
    value = int(match.group())
    return value if value >= 1 else default


@router.get("", response_model=RecordPage)
async def list_records(
    page: str | None = Query(None, description="Page number; invalid values fall back to 1"),
    limit: str | None = Query(None, description="Page size; invalid values fall back to 8"),
    search: str = Query("", description="Case-insensitive substring matched against every text field"),
    sort_by: str = Query("name", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    service: RecordService = Depends(get_record_service),
) -> RecordPage:
    """Retrieve a searched, sorted page of records."""
    listing = await service.list_records(
        page=_positive_int(page, DEFAULT_PAGE),
        page_size=_positive_int(limit, DEFAULT_PAGE_SIZE),
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return RecordPage(
        records=[_to_response(r) for r in listing.records],
        total_records=listing.total_records,
        total_pages=listing.total_pages,
        current_page=listing.current_page,
        page_size=listing.page_size,
    )


@router.get("/count/total", response_model=RecordCount)
async def count_records(
    service: RecordService = Depends(get_record_service),
) -> RecordCount:
    """Total number of stored records."""
    return RecordCount(count=await service.count_records())


@router.get("/date-range", response_model=list[RecordResponse])
async def list_records_by_date_range(
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    service: RecordService = Depends(get_record_service),
) -> list[RecordResponse]:
    """Records whose record date falls within [startDate, endDate]."""
    records = await service.list_by_date_range(start_date, end_date)
    return [_to_response(r) for r in records]


async def _list_by(field: str, value: str, service: RecordService) -> list[RecordResponse]:
    records = await service.list_by_field(field, value)
    return [_to_response(r) for r in records]


@router.get("/state/{state}", response_model=list[RecordResponse])
async def list_records_by_state(
    state: str, service: RecordService = Depends(get_record_service)
) -> list[RecordResponse]:
    return await _list_by("state", state, service)


@router.get("/district/{district}", response_model=list[RecordResponse])
async def list_records_by_district(
    district: str, service: RecordService = Depends(get_record_service)
) -> list[RecordResponse]:
    return await _list_by("district", district, service)


@router.get("/city/{city}", response_model=list[RecordResponse])
async def list_records_by_city(
    city: str, service: RecordService = Depends(get_record_service)
) -> list[RecordResponse]:
    return await _list_by("city", city, service)


@router.get("/zipcode/{zipcode}", response_model=list[RecordResponse])
async def list_records_by_zipcode(
    zipcode: str, service: RecordService = Depends(get_record_service)
) -> list[RecordResponse]:
    return await _list_by("zipcode", zipcode, service)


@router.get("/{record_id}", response_model=RecordResponse, responses=_ERRORS)
async def get_record(
    record_id: str,
    service: RecordService = Depends(get_record_service),
) -> RecordResponse:
    """Retrieve a single record by ID."""
    record = unwrap(await service.get_record(record_id))
    return _to_response(record)


@router.post(
    "",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def create_record(
    data: RecordCreate,
    service: RecordService = Depends(get_record_service),
) -> RecordResponse:
    """Create a new record."""
    record = unwrap(await service.create_record(data))
    return _to_response(record)


@router.put("/{record_id}", response_model=RecordResponse, responses=_ERRORS)
async def update_record(
    record_id: str,
    data: RecordUpdate,
    service: RecordService = Depends(get_record_service),
) -> RecordResponse:
    """Update the fields of an existing record that are present in the body."""
    record = unwrap(await service.update_record(record_id, data))
    return _to_response(record)


@router.delete("/{record_id}", response_model=DeleteResult, responses=_ERRORS)
async def delete_record(
    record_id: str,
    service: RecordService = Depends(get_record_service),
) -> DeleteResult:
    """Delete a record by ID."""
    message = unwrap(await service.delete_record(record_id))
    return DeleteResult(message=message, success=True)
