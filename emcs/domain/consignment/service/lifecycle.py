"""Consignment lifecycle: Draft -> In Transit -> Received.

This service is the only writer of consignment state. Every transition is a
sequence of awaited collaborator calls (ARC issuance, notarization, ledger
submission) followed by a single store write and one appended MovementEvent.
"""

import logging
import math
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from emcs.domain.consignment.event.movement import MovementEvent
from emcs.domain.consignment.model.aggregate import Consignment
from emcs.domain.consignment.model.value import (
    BeerDetails,
    ConsignmentStatus,
    GoodsCategory,
    MovementEventType,
    PartyId,
    TransportDetails,
    Unit,
    is_valid_address,
)
from emcs.domain.consignment.port.event_log import MovementEventLog
from emcs.domain.consignment.port.store import ConsignmentStore
from emcs.domain.consignment.service.duty import calculate_irish_beer_duty
from emcs.domain.ledger.model.value import (
    LedgerOperation,
    OperationKind,
    RawRecord,
    TransactionId,
)
from emcs.domain.ledger.service.executor import LedgerTransactionExecutor
from emcs.domain.notarization.model.value import NotarizationRecord
from emcs.domain.notarization.service.document import (
    EAD_DOCUMENT_TYPE,
    DocumentBuilder,
    build_ead_document,
)
from emcs.domain.notarization.service.notarizer import DocumentNotarizer
from emcs.domain.reference.model.value import ReferenceCode
from emcs.domain.reference.service.reference import ReferenceCodeGenerator
from emcs.domain.shared.error import (
    AuthorizationError,
    ExhaustedRetriesError,
    NotFoundError,
    ValidationError,
)
from emcs.domain.shared.event import EventId
from emcs.domain.shared.model.value import ValueObject
from emcs.domain.shared.service import Service

logger = logging.getLogger(__name__)

# Regenerations when a freshly issued ARC is already in the local store
STORE_COLLISION_ATTEMPTS = 3


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Transition(ValueObject):
    """Outcome of a lifecycle operation."""

    consignment: Consignment
    event: MovementEvent
    notarization: NotarizationRecord | None = None

    @property
    def transaction_id(self) -> TransactionId:
        return self.event.ledger_transaction_id


class LedgerReconciliation(ValueObject):
    """Field-by-field comparison of a stored consignment with its ledger record."""

    reference: str
    verified: bool
    checks: dict[str, bool] = {}
    ledger_record: RawRecord | None = None


class ConsignmentLifecycle(Service):
    store: ConsignmentStore
    event_log: MovementEventLog
    reference_generator: ReferenceCodeGenerator
    executor: LedgerTransactionExecutor
    notarizer: DocumentNotarizer
    document_builder: DocumentBuilder = build_ead_document
    clock: Callable[[], datetime] = _utc_now

    async def create(
        self,
        sender: str,
        receiver: str,
        goods_category: str,
        quantity: float,
        unit: str,
        origin: str | None = None,
        destination: str | None = None,
        transport: TransportDetails | None = None,
        beer: BeerDetails | None = None,
    ) -> Transition:
        category, unit_ = validate_creation(
            sender, receiver, goods_category, quantity, unit, beer=beer
        )
        excise_duty = (
            calculate_irish_beer_duty(quantity, beer.alcohol_percentage)
            if beer is not None and unit_ == Unit.LITERS
            else None
        )

        reference = await self._issue_reference()
        arguments: dict[str, Any] = {
            "arc": str(reference),
            "consignor": sender,
            "consignee": receiver,
            "goods_type": str(category),
            "quantity": quantity,
            "unit": str(unit_),
            "origin": origin or "",
            "destination": destination or "",
        }
        if beer is not None:
            arguments["metadata"] = {
                "beer_name": beer.name,
                "alcohol_percentage": beer.alcohol_percentage,
            }
        operation = LedgerOperation(kind=OperationKind.CREATE_CONSIGNMENT, arguments=arguments)
        tx_id = await self.executor.submit(operation, sender)

        now = self.clock()
        consignment = Consignment(
            reference=reference,
            sender=PartyId(sender),
            receiver=PartyId(receiver),
            goods_category=category,
            quantity=quantity,
            unit=unit_,
            origin=origin,
            destination=destination,
            transport=transport,
            beer=beer,
            excise_duty=excise_duty,
            created_at=now,
        )
        consignment.record_creation(tx_id)
        consignment = await self.store.add(consignment)

        event = await self._record(
            consignment, MovementEventType.CREATED, now, PartyId(sender), tx_id
        )
        logger.info("Consignment %s created in %s", reference, tx_id)
        return Transition(consignment=consignment, event=event)

    async def dispatch(self, reference: str, requester: str) -> Transition:
        consignment = await self.get(reference)
        if requester != consignment.sender:
            raise AuthorizationError(
                "Unauthorized: Only the consignor can dispatch this consignment"
            )
        consignment.require_status(ConsignmentStatus.DRAFT, "dispatch")

        now = self.clock()
        document = self.document_builder(consignment, now)
        notarization = await self.notarizer.notarize(document)

        operation = LedgerOperation(
            kind=OperationKind.DISPATCH_CONSIGNMENT,
            arguments={
                "arc": reference,
                "document_hash": notarization.document_hash,
                "document_type": EAD_DOCUMENT_TYPE,
            },
        )
        tx_id = await self.executor.submit(operation, requester)

        consignment.dispatch(
            notarization.document_hash,
            tx_id,
            now,
            anchor_transaction_id=notarization.ledger_transaction_id,
        )
        consignment = await self.store.put(consignment)

        assert consignment.dispatched_at is not None
        event = await self._record(
            consignment,
            MovementEventType.DISPATCHED,
            consignment.dispatched_at,
            PartyId(requester),
            tx_id,
            document_hash=notarization.document_hash,
        )
        logger.info("Consignment %s dispatched in %s", reference, tx_id)
        return Transition(consignment=consignment, event=event, notarization=notarization)

    async def receive(self, reference: str, requester: str) -> Transition:
        consignment = await self.get(reference)
        if requester != consignment.receiver:
            raise AuthorizationError(
                "Unauthorized: Only the consignee can confirm receipt of this consignment"
            )
        consignment.require_status(ConsignmentStatus.IN_TRANSIT, "receive")

        operation = LedgerOperation(
            kind=OperationKind.RECEIVE_CONSIGNMENT,
            arguments={"arc": reference},
        )
        tx_id = await self.executor.submit(operation, requester)

        consignment.receive(tx_id, self.clock())
        consignment = await self.store.put(consignment)

        assert consignment.received_at is not None
        event = await self._record(
            consignment,
            MovementEventType.RECEIVED,
            consignment.received_at,
            PartyId(requester),
            tx_id,
        )
        logger.info("Consignment %s received in %s", reference, tx_id)
        return Transition(consignment=consignment, event=event)

    async def list_events(self, reference: str) -> list[MovementEvent]:
        """Movement history, oldest first. Unknown references yield an empty list."""
        events = await self.event_log.list_for(reference)
        return sorted(events, key=lambda e: e.timestamp)

    async def get(self, reference: str) -> Consignment:
        consignment = await self.store.get(reference)
        if consignment is None:
            raise NotFoundError(f"Consignment not found: {reference}")
        return consignment

    async def list_by_party(
        self,
        party: str,
        status: ConsignmentStatus | None = None,
    ) -> list[Consignment]:
        consignments = await self.store.list_by_party(PartyId(party))
        if status is not None:
            consignments = [c for c in consignments if c.status == status]
        return consignments

    async def reconcile(self, reference: str) -> LedgerReconciliation:
        """Compare the stored consignment with what the ledger recorded."""
        consignment = await self.get(reference)
        record = await self.executor.get_by_reference(reference)
        if record is None:
            return LedgerReconciliation(reference=reference, verified=False)

        checks = _compare_with_ledger(consignment, record)
        if consignment.anchor_transaction_id is not None:
            anchored = await self.notarizer.hash_from_transaction(
                consignment.anchor_transaction_id
            )
            checks["anchored_hash_match"] = anchored == consignment.document_hash
        return LedgerReconciliation(
            reference=reference,
            verified=all(checks.values()),
            checks=checks,
            ledger_record=record,
        )

    async def _issue_reference(self) -> ReferenceCode:
        # The ledger lookup can miss local records; the ARC must be free in both
        for _ in range(STORE_COLLISION_ATTEMPTS):
            reference = await self.reference_generator.generate()
            if await self.store.get(str(reference)) is None:
                return reference
            logger.warning("Issued ARC %s already stored locally, regenerating", reference)
        raise ExhaustedRetriesError(
            "Could not issue an ARC that is not already stored",
            attempts=STORE_COLLISION_ATTEMPTS,
            code="ARC_COLLISION",
        )

    async def _record(
        self,
        consignment: Consignment,
        event_type: MovementEventType,
        timestamp: datetime,
        actor: PartyId,
        tx_id: TransactionId,
        document_hash: str | None = None,
    ) -> MovementEvent:
        event = MovementEvent(
            id=EventId(uuid4()),
            reference=consignment.reference,
            type=event_type,
            timestamp=timestamp,
            actor=actor,
            ledger_transaction_id=tx_id,
            document_hash=document_hash,
        )
        await self.event_log.append(event)
        return event


def validate_creation(
    sender: str,
    receiver: str,
    goods_category: str,
    quantity: Any,
    unit: str,
    beer: BeerDetails | None = None,
) -> tuple[GoodsCategory, Unit]:
    for name, value in (
        ("sender", sender),
        ("receiver", receiver),
        ("goods_category", goods_category),
        ("unit", unit),
    ):
        if not value:
            raise ValidationError(f"Missing required field: {name}", field=name)

    if (
        isinstance(quantity, bool)
        or not isinstance(quantity, (int, float))
        or not math.isfinite(quantity)
        or quantity <= 0
    ):
        raise ValidationError("Quantity must be a positive number", field="quantity")

    for name, value in (("sender", sender), ("receiver", receiver)):
        if not is_valid_address(value):
            raise ValidationError(f"Invalid address format for {name}: {value}", field=name)

    try:
        category = GoodsCategory(goods_category)
    except ValueError:
        allowed = ", ".join(GoodsCategory)
        raise ValidationError(
            f"Invalid goods type. Must be one of: {allowed}", field="goods_category"
        ) from None

    try:
        unit_ = Unit(unit)
    except ValueError:
        allowed = ", ".join(Unit)
        raise ValidationError(f"Invalid unit. Must be one of: {allowed}", field="unit") from None

    if beer is not None and category != GoodsCategory.BEER:
        raise ValidationError("Beer details are only allowed for Beer consignments", field="beer")

    return category, unit_


def _compare_with_ledger(consignment: Consignment, record: RawRecord) -> dict[str, bool]:
    ledger_hash = record.get("document_hash")
    return {
        "arc_match": record.get("arc") == str(consignment.reference),
        "consignor_match": str(record.get("consignor", "")).lower()
        == consignment.sender.lower(),
        "consignee_match": str(record.get("consignee", "")).lower()
        == consignment.receiver.lower(),
        "goods_type_match": record.get("goods_type") == str(consignment.goods_category),
        "quantity_match": _same_quantity(record.get("quantity"), consignment.quantity),
        "document_hash_match": not ledger_hash or ledger_hash == consignment.document_hash,
    }


def _same_quantity(value: Any, expected: float) -> bool:
    try:
        return math.isclose(float(value), expected)
    except (TypeError, ValueError):
        return False
