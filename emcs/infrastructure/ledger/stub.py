"""In-process ledger returning synthetic but well-formed identifiers."""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime

from emcs.domain.ledger.model.value import (
    EventFilter,
    LedgerEvent,
    LedgerOperation,
    OperationKind,
    RawRecord,
    TransactionId,
)
from emcs.domain.ledger.port.client import LedgerClient

logger = logging.getLogger(__name__)

# On-ledger status codes of the consignment object
_STATUS_DRAFT = 0
_STATUS_IN_TRANSIT = 1
_STATUS_RECEIVED = 2


def _digest() -> str:
    return "0x" + secrets.token_hex(32)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class StubLedgerClient(LedgerClient):
    """Keeps objects and events in memory, mimicking the consignment contract.

    Every submission succeeds and is recorded in ``submitted`` so tests can
    inspect what was sent.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._events: list[LedgerEvent] = []
        self._objects: dict[str, RawRecord] = {}
        self._object_by_reference: dict[str, str] = {}
        self.submitted: list[tuple[LedgerOperation, str]] = []

    async def submit_once(self, operation: LedgerOperation, signer: str) -> TransactionId:
        tx_id = TransactionId(_digest())
        now = self._clock()
        self.submitted.append((operation, signer))

        object_id = self._apply(operation, tx_id, now)
        self._events.append(
            LedgerEvent(
                transaction_id=tx_id,
                kind=operation.kind,
                timestamp=now,
                sender=signer,
                reference=operation.reference,
                object_id=object_id,
                payload=dict(operation.arguments),
            )
        )
        logger.debug("Stub ledger accepted %s as %s", operation.kind, tx_id)
        return tx_id

    async def query(self, filter: EventFilter) -> list[LedgerEvent]:
        return [e for e in self._events if filter.matches(e)]

    async def get_object(self, object_id: str) -> RawRecord | None:
        record = self._objects.get(object_id)
        return dict(record) if record is not None else None

    def _apply(self, operation: LedgerOperation, tx_id: TransactionId, now: datetime) -> str | None:
        timestamp_ms = int(now.timestamp() * 1000)
        args = operation.arguments

        match operation.kind:
            case OperationKind.CREATE_CONSIGNMENT:
                object_id = _digest()
                self._objects[object_id] = {
                    "id": object_id,
                    **args,
                    "status": _STATUS_DRAFT,
                    "created_at": timestamp_ms,
                }
                self._object_by_reference[str(args["arc"])] = object_id
                return object_id
            case OperationKind.DISPATCH_CONSIGNMENT:
                return self._update(
                    operation.reference,
                    status=_STATUS_IN_TRANSIT,
                    document_hash=args.get("document_hash"),
                    dispatched_at=timestamp_ms,
                )
            case OperationKind.RECEIVE_CONSIGNMENT:
                return self._update(
                    operation.reference,
                    status=_STATUS_RECEIVED,
                    received_at=timestamp_ms,
                )
            case OperationKind.ANCHOR_HASH:
                self._objects[tx_id] = {
                    "id": tx_id,
                    "document_hash": args.get("document_hash"),
                    "anchored_at": timestamp_ms,
                }
                return tx_id
        return None

    def _update(self, reference: str | None, **fields: object) -> str | None:
        object_id = self._object_by_reference.get(reference or "")
        if object_id is None:
            return None
        self._objects[object_id].update(fields)
        return object_id
