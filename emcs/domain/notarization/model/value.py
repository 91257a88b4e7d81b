from datetime import datetime

from emcs.domain.ledger.model.value import TransactionId
from emcs.domain.shared.model.value import ValueObject

HASH_PREFIX = "0x"


class NotarizationRecord(ValueObject):
    """Proof that a document with ``document_hash`` was anchored at ``timestamp``."""

    document_hash: str
    ledger_transaction_id: TransactionId
    timestamp: datetime
