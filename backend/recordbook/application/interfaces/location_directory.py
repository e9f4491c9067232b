"""Abstract interface (port) for the read-only state/district reference table."""

from abc import ABC, abstractmethod
from collections.abc import Mapping


class LocationDirectory(ABC):
    """Port for location reference data — implemented in the infrastructure layer.

    Implementations are immutable after construction and safe to share
    across concurrent requests.
    """

    @abstractmethod
    def states(self) -> tuple[str, ...]:
        """All state names, in file order."""
        ...

    @abstractmethod
    def districts(self, state: str) -> tuple[str, ...]:
        """Districts of ``state`` in file order; empty when the state is unknown."""
        ...

    @abstractmethod
    def as_mapping(self) -> Mapping[str, tuple[str, ...]]:
        """The complete state -> districts table."""
        ...
