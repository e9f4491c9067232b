"""Concrete repository implementation for Record backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recordbook.application.interfaces import RecordRepository, SEARCHABLE_FIELDS, SORTABLE_FIELDS
from recordbook.domain.entities import Record
from recordbook.domain.exceptions import EntityNotFoundError, RepositoryError
from recordbook.infrastructure.database.models import RecordModel


def _aware(value: datetime) -> datetime:
    """SQLite drops tzinfo; every timestamp in this table is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyRecordRepository(RecordRepository):
    """Implements the RecordRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RecordModel) -> Record:
        """Map ORM model → domain entity."""
        return Record(
            id=model.id,
            name=model.name,
            phone=model.phone,
            email=model.email,
            address=model.address,
            state=model.state,
            district=model.district,
            city=model.city,
            zipcode=model.zipcode,
            record_date=_aware(model.record_date),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    def _to_model(self, entity: Record) -> RecordModel:
        """Map domain entity → ORM model (for creation)."""
        return RecordModel(
            id=entity.id,
            name=entity.name,
            phone=entity.phone,
            email=entity.email,
            address=entity.address,
            state=entity.state,
            district=entity.district,
            city=entity.city,
            zipcode=entity.zipcode,
            record_date=entity.record_date,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def _flush(self, operation: str) -> None:
        """Flush pending writes; the session is rolled back before re-raising."""
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise RepositoryError(operation, exc) from exc

    @staticmethod
    def _apply_search(stmt: Select, search: str) -> Select:
        if not search:
            return stmt
        pattern = f"%{_escape_like(search)}%"
        return stmt.where(
            or_(
                *(
                    getattr(RecordModel, name).ilike(pattern, escape="\\")
                    for name in SEARCHABLE_FIELDS
                )
            )
        )

    async def get_by_id(self, record_id: str) -> Record | None:
        result = await self._session.get(RecordModel, record_id)
        return self._to_entity(result) if result else None

    async def search(
        self,
        *,
        search: str = "",
        sort_by: str = "name",
        descending: bool = False,
        skip: int = 0,
        limit: int = 8,
    ) -> list[Record]:
        if sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort records by '{sort_by}'")
        column = getattr(RecordModel, sort_by)

        stmt = self._apply_search(select(RecordModel), search)
        stmt = stmt.order_by(
            column.desc() if descending else column.asc(),
            RecordModel.id.asc(),
        ).offset(skip).limit(limit)

        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count(self, *, search: str = "") -> int:
        stmt = self._apply_search(select(func.count()).select_from(RecordModel), search)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def find_by_field(self, field: str, value: str) -> list[Record]:
        if field not in SEARCHABLE_FIELDS:
            raise ValueError(f"Cannot filter records by '{field}'")
        pattern = f"%{_escape_like(value)}%"
        stmt = (
            select(RecordModel)
            .where(getattr(RecordModel, field).ilike(pattern, escape="\\"))
            .order_by(RecordModel.name.asc(), RecordModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def find_by_date_range(self, start: datetime, end: datetime) -> list[Record]:
        stmt = (
            select(RecordModel)
            .where(RecordModel.record_date >= start, RecordModel.record_date <= end)
            .order_by(RecordModel.record_date.asc(), RecordModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, record: Record) -> Record:
        model = self._to_model(record)
        self._session.add(model)
        await self._flush("create")
        return self._to_entity(model)

    async def update(self, record: Record) -> Record:
        model = await self._session.get(RecordModel, record.id)
        if model is None:
            raise EntityNotFoundError("Record", record.id)
        model.name = record.name
        model.phone = record.phone
        model.email = record.email
        model.address = record.address
        model.state = record.state
        model.district = record.district
        model.city = record.city
        model.zipcode = record.zipcode
        model.record_date = record.record_date
        model.updated_at = record.updated_at
        await self._flush("update")
        return self._to_entity(model)

    async def delete(self, record_id: str) -> bool:
        model = await self._session.get(RecordModel, record_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._flush("delete")
        return True
