"""State and district lookup endpoints — static reference data, read-only."""

from fastapi import APIRouter, Depends

from recordbook.application.services import LocationService
from recordbook.infrastructure.dependencies import get_location_service
from recordbook.presentation.api.errors import unwrap

router = APIRouter(prefix="/location", tags=["Location"])


@router.get("/states", response_model=list[str])
async def list_states(
    service: LocationService = Depends(get_location_service),
) -> list[str]:
    """All available state names."""
    return service.list_states()


@router.get("/districts/{state}", response_model=list[str])
async def list_districts(
    state: str,
    service: LocationService = Depends(get_location_service),
) -> list[str]:
    """Districts of a single state; 404 when the state is unknown."""
    return unwrap(service.list_districts(state), not_found_error="State not found")


@router.get("/all", response_model=dict[str, list[str]])
async def list_all(
    service: LocationService = Depends(get_location_service),
) -> dict[str, list[str]]:
    """The complete state -> districts mapping."""
    return service.list_all()
