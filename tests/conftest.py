"""Global test fixtures."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import logfire
import pytest

from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.ledger.service.executor import LedgerTransactionExecutor
from emcs.domain.notarization.service.notarizer import DocumentNotarizer
from emcs.domain.reference.service.reference import ReferenceCodeGenerator
from emcs.infrastructure.ledger.stub import StubLedgerClient
from emcs.infrastructure.persistence.memory import InMemoryConsignmentStore

# Keep spans local; must run before the app module instruments anything
logfire.configure(send_to_logfire=False, console=False)

# Registered demo operators (Dublin Old Brewery -> Tesco Ireland)
SENDER = "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"
RECEIVER = "0x7db01866e872de911ee8d7632a6b30452e97f6ef206504aa534577391e02606a"
OUTSIDER = "0x" + "ab" * 32


class TickingClock:
    """Returns a later instant on every call."""

    def __init__(
        self,
        start: datetime = datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
        step: timedelta = timedelta(minutes=1),
    ) -> None:
        self._now = start
        self._step = step

    def __call__(self) -> datetime:
        now = self._now
        self._now += self._step
        return now


@pytest.fixture
def sender() -> str:
    return SENDER


@pytest.fixture
def receiver() -> str:
    return RECEIVER


@pytest.fixture
def outsider() -> str:
    return OUTSIDER


@pytest.fixture
def creation_args():
    """Factory for valid create() keyword arguments."""

    def make(**overrides) -> dict:
        args = {
            "sender": SENDER,
            "receiver": RECEIVER,
            "goods_category": "Beer",
            "quantity": 1200.0,
            "unit": "Liters",
            "origin": "Dublin, IE",
            "destination": "Dun Laoghaire, IE",
        }
        args.update(overrides)
        return args

    return make


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def ledger(clock) -> StubLedgerClient:
    return StubLedgerClient(clock=clock)


@pytest.fixture
def executor(ledger) -> LedgerTransactionExecutor:
    return LedgerTransactionExecutor(client=ledger, sleep=AsyncMock())


@pytest.fixture
def store() -> InMemoryConsignmentStore:
    return InMemoryConsignmentStore()


@pytest.fixture
def lifecycle(store, executor, clock) -> ConsignmentLifecycle:
    return ConsignmentLifecycle(
        store=store,
        event_log=store,
        reference_generator=ReferenceCodeGenerator(lookup=executor, clock=clock),
        executor=executor,
        notarizer=DocumentNotarizer(executor=executor, clock=clock),
        clock=clock,
    )
