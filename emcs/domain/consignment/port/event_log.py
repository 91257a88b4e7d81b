from abc import abstractmethod
from typing import Protocol

from emcs.domain.consignment.event.movement import MovementEvent
from emcs.domain.shared.port import Port


class MovementEventLog(Port, Protocol):
    """Append-only log of movement events."""

    @abstractmethod
    async def append(self, event: MovementEvent) -> None: ...

    @abstractmethod
    async def list_for(self, reference: str) -> list[MovementEvent]:
        """Events recorded for ``reference`` in append order (empty if none)."""
        ...
