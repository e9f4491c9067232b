"""Tagged outcomes returned by application services.

Services never signal "not found" or "invalid input" by raising; callers
branch on the concrete result type instead.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class ValidationFailed:
    """Input rejected; ``field_errors`` maps field name to a readable message."""

    field_errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    message: str = "Not found"


@dataclass(frozen=True)
class InternalError:
    message: str = "Internal server error"


Result = Union[Ok[T], ValidationFailed, NotFound, InternalError]
