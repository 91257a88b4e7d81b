from emcs.infrastructure.ledger.di import LedgerProvider

__all__ = ["LedgerProvider"]
