"""Location reference table backed by a bundled JSON file.

The file maps each state name to an ordered list of district names::

    {"Karnataka": ["Bagalkot", "Ballari", ...], ...}

It is read once per process and exposed through immutable structures.
"""

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from recordbook.application.interfaces import LocationDirectory
from recordbook.config import get_settings

logger = logging.getLogger(__name__)


class JsonLocationDirectory(LocationDirectory):
    """Infrastructure adapter — serves states and districts from a JSON mapping."""

    def __init__(self, table: Mapping[str, list[str] | tuple[str, ...]]):
        self._table: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {str(state): tuple(districts) for state, districts in table.items()}
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "JsonLocationDirectory":
        """Load the table from ``path``; raises on a missing or malformed file."""
        path = Path(path)
        raw = json.loads(path.read_text("utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Location data in {path} must be a JSON object")
        for state, districts in raw.items():
            if not isinstance(districts, list):
                raise ValueError(f"Districts for '{state}' in {path} must be a list")
        directory = cls(raw)
        logger.info(
            "Loaded location data: %d states, %d districts from %s",
            len(directory._table),
            sum(len(d) for d in directory._table.values()),
            path,
        )
        return directory

    def states(self) -> tuple[str, ...]:
        return tuple(self._table.keys())

    def districts(self, state: str) -> tuple[str, ...]:
        return self._table.get(state, ())

    def as_mapping(self) -> Mapping[str, tuple[str, ...]]:
        return self._table


@lru_cache
def get_location_directory() -> JsonLocationDirectory:
    """Process-wide directory — loaded from the configured file on first use."""
    return JsonLocationDirectory.from_file(get_settings().location_data_file)
