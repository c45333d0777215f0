"""
Entity and value object base classes.

Entities have identity: two entities are equal when they share a class
and an id, whatever their other attributes. Value objects have no
identity and compare by value (frozen dataclasses give this for free).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4


def generate_id() -> str:
    """Return a new random identifier (uuid4, canonical string form)."""
    return str(uuid4())


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class Entity:
    """Base class for domain entities.

    Subclasses must be declared with ``@dataclass(eq=False)`` so the
    identity-based equality below is kept.
    """

    id: str

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Entity) or type(other) is not type(self):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


@dataclass(frozen=True)
class ValueObject:
    """Marker base class for immutable value objects."""
