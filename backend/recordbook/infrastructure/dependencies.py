"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from recordbook.application.services import LocationService, RecordService
from recordbook.infrastructure.database.session import get_db_session
from recordbook.infrastructure.database.repositories import SQLAlchemyRecordRepository
from recordbook.infrastructure.location import get_location_directory


async def get_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RecordService, None]:
    """Provides a RecordService instance with its repository wired up."""
    repository = SQLAlchemyRecordRepository(session)
    yield RecordService(repository)


def get_location_service() -> LocationService:
    """Provides a LocationService over the process-wide location directory."""
    return LocationService(get_location_directory())
