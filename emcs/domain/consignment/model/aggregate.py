from datetime import datetime
from decimal import Decimal

from pydantic import Field, PositiveFloat

from emcs.domain.consignment.model.value import (
    BeerDetails,
    ConsignmentStatus,
    GoodsCategory,
    PartyId,
    TransportDetails,
    Unit,
)
from emcs.domain.ledger.model.value import TransactionId
from emcs.domain.reference.model.value import ReferenceCode
from emcs.domain.shared.error import InvalidTransitionError
from emcs.domain.shared.model.entity import Aggregate


class Consignment(Aggregate):
    """A movement of excise goods from ``sender`` to ``receiver``.

    Status only moves forward: Draft -> In Transit -> Received. Each
    timestamp is set at most once and never precedes the previous one;
    ``document_hash`` is set exactly when ``dispatched_at`` is.
    """

    reference: ReferenceCode
    sender: PartyId
    receiver: PartyId
    goods_category: GoodsCategory
    quantity: PositiveFloat
    unit: Unit
    origin: str | None = None
    destination: str | None = None
    transport: TransportDetails | None = None
    beer: BeerDetails | None = None
    excise_duty: Decimal | None = None
    status: ConsignmentStatus = ConsignmentStatus.DRAFT
    document_hash: str | None = None
    anchor_transaction_id: TransactionId | None = None
    created_at: datetime
    dispatched_at: datetime | None = None
    received_at: datetime | None = None
    ledger_transaction_ids: list[TransactionId] = Field(default_factory=list)

    def involves(self, party: str) -> bool:
        return party in (self.sender, self.receiver)

    def require_status(self, expected: ConsignmentStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidTransitionError(
                f"Cannot {action} consignment with status: {self.status}",
                current_status=str(self.status),
            )

    def record_creation(self, transaction_id: TransactionId) -> None:
        self.ledger_transaction_ids.append(transaction_id)

    def dispatch(
        self,
        document_hash: str,
        transaction_id: TransactionId,
        at: datetime,
        anchor_transaction_id: TransactionId | None = None,
    ) -> None:
        self.require_status(ConsignmentStatus.DRAFT, "dispatch")
        if not document_hash:
            raise ValueError("document_hash must not be empty")
        self.status = ConsignmentStatus.IN_TRANSIT
        self.document_hash = document_hash
        self.anchor_transaction_id = anchor_transaction_id
        self.dispatched_at = max(at, self.created_at)
        self.ledger_transaction_ids.append(transaction_id)

    def receive(self, transaction_id: TransactionId, at: datetime) -> None:
        self.require_status(ConsignmentStatus.IN_TRANSIT, "receive")
        assert self.dispatched_at is not None
        self.status = ConsignmentStatus.RECEIVED
        self.received_at = max(at, self.dispatched_at)
        self.ledger_transaction_ids.append(transaction_id)
