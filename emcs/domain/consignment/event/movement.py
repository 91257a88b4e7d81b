from datetime import datetime
from typing import Any

from pydantic import model_validator

from emcs.domain.consignment.model.value import MovementEventType, PartyId
from emcs.domain.ledger.model.value import TransactionId
from emcs.domain.reference.model.value import ReferenceCode
from emcs.domain.shared.event import Event, EventId


class MovementEvent(Event):
    """Append-only record of one lifecycle transition of a consignment.

    ``created_at`` mirrors ``timestamp``; a movement event has one time.
    """

    id: EventId
    reference: ReferenceCode
    type: MovementEventType
    timestamp: datetime
    actor: PartyId
    ledger_transaction_id: TransactionId
    document_hash: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _created_at_from_timestamp(cls, data: Any) -> Any:
        if isinstance(data, dict) and "timestamp" in data:
            data = {**data, "created_at": data["timestamp"]}
        return data
