"""Domain events."""

from datetime import UTC, datetime
from typing import Any, ClassVar, NewType, TypeVar
from uuid import UUID

from pydantic import ConfigDict, Field

from emcs.domain.shared.model.entity import Entity

EventId = NewType("EventId", UUID)

E = TypeVar("E", bound="Event")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Event(Entity):
    """Base class for domain events. Events are immutable once recorded.

    Subclasses are automatically registered by name in Event._registry.
    """

    model_config = ConfigDict(frozen=True)

    id: EventId
    created_at: datetime = Field(default_factory=_utc_now)

    # Auto-populated registry of all Event subclasses
    _registry: ClassVar[dict[str, type["Event"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry[cls.__name__] = cls

    @classmethod
    def resolve(cls, name: str) -> type["Event"]:
        """Look up a registered event class by name (used when reloading persisted events)."""
        try:
            return cls._registry[name]
        except KeyError:
            raise KeyError(f"Unknown event type: {name}") from None
