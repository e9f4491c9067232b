"""Unit tests for the RecordService."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from recordbook.application.interfaces import RecordRepository, SEARCHABLE_FIELDS
from recordbook.application.schemas import RecordCreate, RecordUpdate
from recordbook.application.services import RecordService
from recordbook.domain.entities import Record
from recordbook.domain.exceptions import RepositoryError
from recordbook.domain.results import InternalError, NotFound, Ok, ValidationFailed

class FakeRecordRepository(RecordRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._records: dict[str, Record] = {}

    def _matching(self, search: str) -> list[Record]:
        if not search:
            return list(self._records.values())
        needle = search.lower()
        return [
            r
            for r in self._records.values()
            if any(needle in getattr(r, name).lower() for name in SEARCHABLE_FIELDS)
        ]

    async def get_by_id(self, record_id: str) -> Record | None:
        return self._records.get(record_id)

    async def search(
        self,
        *,
        search: str = "",
        sort_by: str = "name",
        descending: bool = False,
        skip: int = 0,
        limit: int = 8,
    ) -> list[Record]:
        records = sorted(self._matching(search), key=lambda r: r.id)
        records.sort(key=lambda r: getattr(r, sort_by), reverse=descending)
        return records[skip : skip + limit]

    async def count(self, *, search: str = "") -> int:
        return len(self._matching(search))

    async def find_by_field(self, field: str, value: str) -> list[Record]:
        needle = value.lower()
        return [r for r in self._records.values() if needle in getattr(r, field).lower()]

    async def find_by_date_range(self, start: datetime, end: datetime) -> list[Record]:
        return [r for r in self._records.values() if start <= r.record_date <= end]

    async def create(self, record: Record) -> Record:
        self._records[record.id] = record
        return record

    async def update(self, record: Record) -> Record:
        if record.id not in self._records:
            raise ValueError(f"Record {record.id} not found")
        self._records[record.id] = record
        return record

    async def delete(self, record_id: str) -> bool:
        if record_id in self._records:
            del self._records[record_id]
            return True
        return False


class FailingRecordRepository(FakeRecordRepository):
    """Fake whose writes always fail at the storage layer."""

    async def create(self, record: Record) -> Record:
        raise RepositoryError("create", RuntimeError("disk full"))

    async def delete(self, record_id: str) -> bool:
        raise RepositoryError("delete", RuntimeError("disk full"))


def _payload(**overrides) -> dict:
    data = {
        "name": "Asha Verma",
        "phone": "9876543210",
        "email": "asha.verma@example.in",
        "address": "14 MG Road, Near City Mall",
        "state": "Karnataka",
        "district": "Bengaluru Urban",
        "city": "Bengaluru",
        "zipcode": "560001",
        "recordDate": "2024-03-15T00:00:00Z",
    }
    data.update(overrides)
    return data


@pytest.fixture
def service() -> RecordService:
    return RecordService(FakeRecordRepository())


async def _create(service: RecordService, **overrides) -> Record:
    result = await service.create_record(RecordCreate.model_validate(_payload(**overrides)))
    assert isinstance(result, Ok), result
    return result.value


@pytest.mark.asyncio
async def test_create_then_get_returns_same_fields(service: RecordService):
    created = await _create(service)
    fetched = await service.get_record(created.id)

    assert isinstance(fetched, Ok)
    record = fetched.value
    assert record.id == created.id
    assert record.name == "Asha Verma"
    assert record.email == "asha.verma@example.in"
    assert record.address == "14 MG Road, Near City Mall"
    assert (record.state, record.district, record.city) == ("Karnataka", "Bengaluru Urban", "Bengaluru")
    assert record.zipcode == "560001"
    assert record.record_date == datetime(2024, 3, 15, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_create_formats_phone(service: RecordService):
    record = await _create(service, phone="1234567890")
    assert record.phone == "(123)-456-7890"
    assert record.formatted_phone == "(123)-456-7890"


@pytest.mark.asyncio
async def test_create_trims_values_and_lowercases_email(service: RecordService):
    record = await _create(service, name="  Ravi Kumar  ", email=" Ravi.Kumar@Example.IN ")
    assert record.name == "Ravi Kumar"
    assert record.email == "ravi.kumar@example.in"


@pytest.mark.asyncio
async def test_create_defaults_record_date_to_now(service: RecordService):
    data = _payload()
    del data["recordDate"]
    before = datetime.now(timezone.utc)
    result = await service.create_record(RecordCreate.model_validate(data))
    assert isinstance(result, Ok)
    assert before <= result.value.record_date <= datetime.now(timezone.utc)


@pytest.mark.asyncio
async def test_create_rejects_five_digit_zipcode(service: RecordService):
    result = await service.create_record(RecordCreate.model_validate(_payload(zipcode="12345")))
    assert isinstance(result, ValidationFailed)
    assert set(result.field_errors) == {"zipcode"}


@pytest.mark.asyncio
async def test_create_reports_every_missing_field(service: RecordService):
    result = await service.create_record(RecordCreate())
    assert isinstance(result, ValidationFailed)
    assert set(result.field_errors) == {
        "name", "phone", "email", "address", "state", "district", "city", "zipcode",
    }
    assert await service.count_records() == 0


@pytest.mark.asyncio
async def test_create_storage_failure_is_internal_error():
    service = RecordService(FailingRecordRepository())
    result = await service.create_record(RecordCreate.model_validate(_payload()))
    assert isinstance(result, InternalError)


@pytest.mark.asyncio
async def test_delete_storage_failure_is_internal_error():
    result = await RecordService(FailingRecordRepository()).delete_record("any-id")
    assert isinstance(result, InternalError)
    assert result.message == "Failed to delete record"


@pytest.mark.asyncio
async def test_get_record_not_found(service: RecordService):
    assert isinstance(await service.get_record("missing"), NotFound)


@pytest.mark.asyncio
async def test_update_unknown_id_is_not_found_even_with_invalid_data(service: RecordService):
    result = await service.update_record("missing", RecordUpdate(zipcode="1", phone="12"))
    assert isinstance(result, NotFound)


@pytest.mark.asyncio
async def test_update_replaces_only_sent_fields(service: RecordService):
    created = await _create(service)
    result = await service.update_record(created.id, RecordUpdate(city="Mysuru", district="Mysuru"))

    assert isinstance(result, Ok)
    assert result.value.city == "Mysuru"
    assert result.value.district == "Mysuru"
    assert result.value.name == "Asha Verma"
    assert result.value.phone == "(987)-654-3210"


@pytest.mark.asyncio
async def test_update_reformats_changed_phone(service: RecordService):
    created = await _create(service)
    result = await service.update_record(created.id, RecordUpdate(phone="111-222-3333"))
    assert isinstance(result, Ok)
    assert result.value.phone == "(111)-222-3333"


@pytest.mark.asyncio
async def test_update_validates_merged_record(service: RecordService):
    created = await _create(service)
    result = await service.update_record(created.id, RecordUpdate(email="nope"))

    assert isinstance(result, ValidationFailed)
    assert set(result.field_errors) == {"email"}
    unchanged = await service.get_record(created.id)
    assert unchanged.value.email == "asha.verma@example.in"


@pytest.mark.asyncio
async def test_update_with_explicit_null_is_rejected(service: RecordService):
    created = await _create(service)
    result = await service.update_record(created.id, RecordUpdate.model_validate({"name": None}))
    assert isinstance(result, ValidationFailed)
    assert "name" in result.field_errors


@pytest.mark.asyncio
async def test_delete_twice(service: RecordService):
    created = await _create(service)
    assert isinstance(await service.delete_record(created.id), Ok)
    assert isinstance(await service.delete_record(created.id), NotFound)


@pytest.mark.asyncio
@pytest.mark.parametrize("sort_by", ["name", "email", "city", "zipcode", "recordDate", "createdAt"])
@pytest.mark.parametrize("sort_order", ["asc", "desc"])
async def test_pages_cover_every_record_exactly_once(service: RecordService, sort_by, sort_order):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ids = set()
    for i in range(20):
        # Only five distinct names/cities so the sort key has plenty of ties
        record = await _create(
            service,
            name=f"Person {i % 5}",
            email=f"person{i}@example.in",
            city=f"City {i % 5}",
            zipcode=f"{560000 + i % 3:06d}",
            recordDate=(base + timedelta(days=i % 4)).isoformat(),
        )
        ids.add(record.id)

    first = await service.list_records(page=1, page_size=8, sort_by=sort_by, sort_order=sort_order)
    assert first.total_records == 20
    assert first.total_pages == 3

    seen: list[str] = []
    for page in range(1, first.total_pages + 1):
        listing = await service.list_records(
            page=page, page_size=8, sort_by=sort_by, sort_order=sort_order
        )
        assert listing.current_page == page
        assert listing.page_size == 8
        seen.extend(r.id for r in listing.records)

    assert len(seen) == 20
    assert set(seen) == ids


@pytest.mark.asyncio
async def test_list_defaults(service: RecordService):
    await _create(service, name="Zoya Khan")
    await _create(service, name="Arjun Mehta")

    listing = await service.list_records()
    assert listing.current_page == 1
    assert listing.page_size == 8
    assert [r.name for r in listing.records] == ["Arjun Mehta", "Zoya Khan"]


@pytest.mark.asyncio
async def test_list_unknown_sort_field_falls_back_to_name(service: RecordService):
    await _create(service, name="Zoya Khan")
    await _create(service, name="Arjun Mehta")

    listing = await service.list_records(sort_by="password")
    assert [r.name for r in listing.records] == ["Arjun Mehta", "Zoya Khan"]


@pytest.mark.asyncio
async def test_search_matches_email_only_record(service: RecordService):
    for i in range(5):
        await _create(service, name=f"Person {i}", email=f"person{i}@example.in")
    target = await _create(service, name="Person 9", email="unique.handle@mailbox.in")

    listing = await service.list_records(search="UNIQUE.HANDLE")
    assert [r.id for r in listing.records] == [target.id]
    assert listing.total_records == 1
    assert listing.total_pages == 1


@pytest.mark.asyncio
async def test_search_without_matches(service: RecordService):
    await _create(service)
    listing = await service.list_records(search="zzz-nothing")
    assert listing.records == []
    assert listing.total_records == 0
    assert listing.total_pages == math.ceil(0 / 8)


@pytest.mark.asyncio
async def test_list_by_field_and_date_range(service: RecordService):
    early = await _create(service, state="Kerala", district="Ernakulam", city="Kochi",
                          recordDate="2024-01-10T00:00:00Z")
    await _create(service, recordDate="2024-06-01T00:00:00Z")

    by_state = await service.list_by_field("state", "kerala")
    assert [r.id for r in by_state] == [early.id]

    in_range = await service.list_by_date_range(
        datetime(2024, 1, 1), datetime(2024, 1, 31, tzinfo=timezone.utc)
    )
    assert [r.id for r in in_range] == [early.id]


@pytest.mark.asyncio
async def test_list_by_field_rejects_unknown_field(service: RecordService):
    with pytest.raises(ValueError):
        await service.list_by_field("email", "x")
