import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from emcs.domain.ledger.model.value import LedgerOperation, OperationKind
from emcs.domain.ledger.port.client import LedgerClient
from emcs.domain.ledger.service.executor import LedgerTransactionExecutor
from emcs.domain.notarization.model.value import NotarizationRecord
from emcs.domain.notarization.service.canonical import canonicalize, digest
from emcs.domain.shared.error import NotarizationFailedError, SubmissionFailedError
from emcs.domain.shared.service import Service

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class DocumentNotarizer(Service):
    """Hashes documents and anchors the hash (never the document) on the ledger."""

    executor: LedgerTransactionExecutor
    clock: Callable[[], datetime] = _utc_now

    async def notarize(self, document: Any, signer: str = "") -> NotarizationRecord:
        """Canonicalize, hash and anchor ``document``.

        ``signer`` defaults to empty; binding a real signer is the caller's job.

        Raises:
            NotarizationFailedError: Serialization failed or the anchor
                transaction exhausted its retries. The cause is chained.
        """
        try:
            document_hash = digest(canonicalize(document))
        except (TypeError, ValueError) as e:
            raise NotarizationFailedError(f"Failed to serialize document: {e}") from e
        logger.debug("Document hash computed: %s", document_hash)

        operation = LedgerOperation(
            kind=OperationKind.ANCHOR_HASH,
            arguments={"document_hash": document_hash},
        )
        try:
            tx_id = await self.executor.submit(operation, signer)
        except SubmissionFailedError as e:
            raise NotarizationFailedError(f"Failed to anchor document hash: {e}") from e

        logger.info("Document hash %s anchored in %s", document_hash, tx_id)
        return NotarizationRecord(
            document_hash=document_hash,
            ledger_transaction_id=tx_id,
            timestamp=self.clock(),
        )

    def verify(self, document: Any, expected_hash: str) -> bool:
        """Recompute the hash of ``document`` and compare; never raises."""
        try:
            actual = digest(canonicalize(document))
        except (TypeError, ValueError):
            logger.warning("Document could not be serialized for verification")
            return False

        if actual != expected_hash:
            logger.info("Document verification failed: hash mismatch")
            return False
        return True

    async def hash_from_transaction(self, transaction_id: str) -> str | None:
        """Read the anchored hash back from the ledger, or None if unavailable."""
        client: LedgerClient = self.executor.client
        record = await client.get_object(transaction_id)
        if record is None:
            return None
        value = record.get("document_hash")
        return str(value) if value else None
