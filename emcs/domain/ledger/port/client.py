from abc import abstractmethod
from typing import Protocol

from emcs.domain.ledger.model.value import (
    EventFilter,
    LedgerEvent,
    LedgerOperation,
    RawRecord,
    TransactionId,
)
from emcs.domain.shared.port import Port


class LedgerClient(Port, Protocol):
    """Single-attempt access to the distributed ledger.

    Retrying is not the client's job; see LedgerTransactionExecutor.
    """

    @abstractmethod
    async def submit_once(self, operation: LedgerOperation, signer: str) -> TransactionId:
        """Sign and submit one transaction, returning its digest."""
        ...

    @abstractmethod
    async def query(self, filter: EventFilter) -> list[LedgerEvent]:
        """Return committed events matching the filter (empty when none)."""
        ...

    @abstractmethod
    async def get_object(self, object_id: str) -> RawRecord | None:
        """Fetch a ledger object by id, or None when it does not exist."""
        ...
