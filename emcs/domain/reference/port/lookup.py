from abc import abstractmethod
from typing import Any, Protocol

from emcs.domain.shared.port import Port


class ReferenceLookup(Port, Protocol):
    """Answers whether an ARC is already recorded (implemented by the ledger executor)."""

    @abstractmethod
    async def get_by_reference(self, reference: str) -> Any | None: ...
