"""Abstract repository interface (port) for Record persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from recordbook.domain.entities import Record

# Text columns covered by the free-text search.
SEARCHABLE_FIELDS: tuple[str, ...] = (
    "name",
    "email",
    "phone",
    "address",
    "state",
    "district",
    "city",
    "zipcode",
)

SORTABLE_FIELDS: tuple[str, ...] = SEARCHABLE_FIELDS + (
    "record_date",
    "created_at",
    "updated_at",
)


class RecordRepository(ABC):
    """Port for record persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, record_id: str) -> Record | None:
        """Retrieve a single record by its UUID."""
        ...

    @abstractmethod
    async def search(
        self,
        *,
        search: str = "",
        sort_by: str = "name",
        descending: bool = False,
        skip: int = 0,
        limit: int = 8,
    ) -> list[Record]:
        """Case-insensitive substring search over SEARCHABLE_FIELDS, sorted and paginated.

        Ties on ``sort_by`` are broken by id so consecutive pages never overlap.
        """
        ...

    @abstractmethod
    async def count(self, *, search: str = "") -> int:
        """Number of records matching ``search`` (all records when empty)."""
        ...

    @abstractmethod
    async def find_by_field(self, field: str, value: str) -> list[Record]:
        """Records whose ``field`` contains ``value``, case-insensitively."""
        ...

    @abstractmethod
    async def find_by_date_range(self, start: datetime, end: datetime) -> list[Record]:
        """Records whose record_date lies within [start, end]."""
        ...

    @abstractmethod
    async def create(self, record: Record) -> Record:
        """Persist a new record and return it."""
        ...

    @abstractmethod
    async def update(self, record: Record) -> Record:
        """Overwrite an existing record."""
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...
