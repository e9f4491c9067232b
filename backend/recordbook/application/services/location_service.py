"""Application service for the state/district reference lookups."""

from recordbook.application.interfaces import LocationDirectory
from recordbook.domain.results import NotFound, Ok

DISTRICTS_NOT_FOUND = "No districts found for the specified state"


class LocationService:
    """Read-only queries over the location directory."""

    def __init__(self, directory: LocationDirectory):
        self._directory = directory

    def list_states(self) -> list[str]:
        return list(self._directory.states())

    def list_districts(self, state: str) -> Ok[list[str]] | NotFound:
        districts = self._directory.districts(state)
        if not districts:
            return NotFound(DISTRICTS_NOT_FOUND)
        return Ok(list(districts))

    def list_all(self) -> dict[str, list[str]]:
        return {state: list(districts) for state, districts in self._directory.as_mapping().items()}
