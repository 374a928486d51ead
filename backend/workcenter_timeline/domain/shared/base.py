"""Base classes for domain entities and value objects."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __eq__(self, other: Any) -> bool:
        """Value objects are equal if all their attributes are equal."""
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        """Value objects with same values have same hash."""
        return hash(tuple(sorted(self.model_dump().items())))


class Entity(BaseModel, ABC):
    """Base class for entities (have identity, can change over time)."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @property
    @abstractmethod
    def identity(self) -> str:
        """Business identifier of the entity."""

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same identity and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.identity == other.identity

    def __hash__(self) -> int:
        """Hash based on entity identity."""
        return hash(self.identity)


class DomainService(ABC):
    """Base class for domain services (business logic that doesn't belong to a single entity)."""

    pass
