"""Base model for all domain entities."""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class LookupState(str, Enum):
    """Resolution state of a memoised lookup."""

    UNRESOLVED = "unresolved"
    MISSING = "missing"
    FOUND = "found"


class Lookup(Generic[T]):
    """Request-scoped memo for a related record.

    Distinguishes "not looked up yet" from "looked up, nothing there",
    so a missing record is not fetched again on every access.
    """

    __slots__ = ("state", "value")

    def __init__(self) -> None:
        self.state = LookupState.UNRESOLVED
        self.value: T | None = None

    @property
    def is_resolved(self) -> bool:
        return self.state is not LookupState.UNRESOLVED

    def resolve(self, value: T | None) -> T | None:
        """Record the result of a lookup and return it."""
        self.state = LookupState.MISSING if value is None else LookupState.FOUND
        self.value = value
        return value
