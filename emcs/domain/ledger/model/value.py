from datetime import datetime
from enum import StrEnum
from typing import Any, NewType

from pydantic import Field

from emcs.domain.shared.model.value import ValueObject

TransactionId = NewType("TransactionId", str)

# Raw ledger object as returned by the node (field names are the ledger's)
RawRecord = dict[str, Any]


class OperationKind(StrEnum):
    CREATE_CONSIGNMENT = "create_consignment"
    DISPATCH_CONSIGNMENT = "dispatch_consignment"
    RECEIVE_CONSIGNMENT = "receive_consignment"
    ANCHOR_HASH = "anchor_hash"


class LedgerOperation(ValueObject):
    """Opaque transaction descriptor handed to the ledger.

    Resubmitting the same descriptor must be safe: idempotency is the
    ledger's responsibility, no state is kept between attempts.
    """

    kind: OperationKind
    arguments: dict[str, Any] = Field(default_factory=dict)

    @property
    def reference(self) -> str | None:
        """ARC the operation concerns, if any."""
        value = self.arguments.get("arc")
        return str(value) if value is not None else None


class LedgerEvent(ValueObject):
    """Event emitted by the ledger for a committed transaction."""

    transaction_id: TransactionId
    kind: OperationKind
    timestamp: datetime
    sender: str = ""
    reference: str | None = None
    object_id: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)


class EventFilter(ValueObject):
    """Filter for ledger event queries. Unset fields match everything."""

    reference: str | None = None
    party: str | None = None
    kind: OperationKind | None = None

    def matches(self, event: LedgerEvent) -> bool:
        if self.reference is not None and event.reference != self.reference:
            return False
        if self.kind is not None and event.kind != self.kind:
            return False
        if self.party is not None:
            parties = {event.sender, event.payload.get("consignor"), event.payload.get("consignee")}
            if self.party not in parties:
                return False
        return True
