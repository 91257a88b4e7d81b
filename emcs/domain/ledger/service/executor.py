import asyncio
import logging
from collections.abc import Awaitable, Callable

from emcs.domain.ledger.model.value import (
    EventFilter,
    LedgerEvent,
    LedgerOperation,
    OperationKind,
    RawRecord,
    TransactionId,
)
from emcs.domain.ledger.port.client import LedgerClient
from emcs.domain.shared.error import SubmissionFailedError
from emcs.domain.shared.service import Service

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class LedgerTransactionExecutor(Service):
    """Submits ledger transactions with bounded retry and exponential backoff.

    Attempt ``n`` that fails is followed by a wait of ``base_delay * 2**(n-1)``
    seconds, except after the final attempt. A per-attempt timeout counts as a
    failed attempt. Operations are resubmitted as-is, so they must be safe to
    replay (the ledger deduplicates by digest).
    """

    client: LedgerClient
    max_attempts: int = 3
    base_delay: float = 1.0
    attempt_timeout: float | None = None
    sleep: Sleep = asyncio.sleep

    def backoff_delay(self, attempt: int) -> float:
        return self.base_delay * (2 ** (attempt - 1))

    async def submit(
        self,
        operation: LedgerOperation,
        signer: str,
        timeout: float | None = None,
    ) -> TransactionId:
        deadline = timeout if timeout is not None else self.attempt_timeout
        last_error: BaseException | None = None

        for attempt in range(1, self.max_attempts + 1):
            logger.info(
                "Executing %s transaction (attempt %d/%d)",
                operation.kind,
                attempt,
                self.max_attempts,
            )
            try:
                async with asyncio.timeout(deadline):
                    tx_id = await self.client.submit_once(operation, signer)
            except Exception as e:
                last_error = e
                logger.warning("Transaction attempt %d failed: %r", attempt, e)
                if attempt < self.max_attempts:
                    delay = self.backoff_delay(attempt)
                    logger.info("Retrying in %.1fs", delay)
                    await self.sleep(delay)
                continue

            logger.info("Transaction executed: %s", tx_id)
            return tx_id

        raise SubmissionFailedError(self.max_attempts, last_error) from last_error

    # --- Reads: single passthrough, empty result when the ledger has nothing ---

    async def query_events(self, filter: EventFilter) -> list[LedgerEvent]:
        return await self.client.query(filter)

    async def get_by_reference(self, reference: str) -> RawRecord | None:
        """Return the ledger object created for an ARC, or None."""
        events = await self.client.query(
            EventFilter(reference=reference, kind=OperationKind.CREATE_CONSIGNMENT)
        )
        for event in events:
            if event.object_id:
                return await self.client.get_object(event.object_id)
        return None

    async def get_by_party(self, party: str) -> list[RawRecord]:
        """Return ledger consignment objects where ``party`` is consignor or consignee."""
        events = await self.client.query(
            EventFilter(party=party, kind=OperationKind.CREATE_CONSIGNMENT)
        )
        records: list[RawRecord] = []
        for event in events:
            if not event.object_id:
                continue
            record = await self.client.get_object(event.object_id)
            if record is not None:
                records.append(record)
        return records
