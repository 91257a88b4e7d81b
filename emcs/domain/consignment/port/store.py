from abc import abstractmethod
from typing import Protocol

from emcs.domain.consignment.model.aggregate import Consignment
from emcs.domain.consignment.model.value import PartyId
from emcs.domain.shared.port import Port


class ConsignmentStore(Port, Protocol):
    """Keyed consignment storage.

    Implementations must serialize writes per reference: ``put`` compares the
    stored version with ``consignment.version`` and raises ConflictError on a
    stale write, so at most one transition per reference wins.
    """

    @abstractmethod
    async def get(self, reference: str) -> Consignment | None:
        """Return the consignment, or None when it is not stored."""
        ...

    @abstractmethod
    async def add(self, consignment: Consignment) -> Consignment:
        """Insert a new consignment. Raises ConflictError if the ARC is taken."""
        ...

    @abstractmethod
    async def put(self, consignment: Consignment) -> Consignment:
        """Replace an existing consignment (optimistic version check)."""
        ...

    @abstractmethod
    async def list_by_party(self, party: PartyId) -> list[Consignment]:
        """Consignments where ``party`` is sender or receiver."""
        ...
