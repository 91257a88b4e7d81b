"""Tests for LedgerTransactionExecutor retry/backoff and read passthroughs."""

import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock, call

import pytest

from emcs.domain.ledger.model.value import (
    EventFilter,
    LedgerEvent,
    LedgerOperation,
    OperationKind,
    TransactionId,
)
from emcs.domain.ledger.service.executor import LedgerTransactionExecutor
from emcs.domain.shared.error import ExhaustedRetriesError, SubmissionFailedError

OPERATION = LedgerOperation(
    kind=OperationKind.CREATE_CONSIGNMENT,
    arguments={"arc": "24EU12345678901234564"},
)
SIGNER = "0xabc"


def make_executor(client, **kwargs) -> tuple[LedgerTransactionExecutor, AsyncMock]:
    sleep = AsyncMock()
    return LedgerTransactionExecutor(client=client, sleep=sleep, **kwargs), sleep


class TestSubmit:
    @pytest.mark.asyncio
    async def test_first_attempt_succeeds_without_waiting(self):
        client = AsyncMock()
        client.submit_once.return_value = TransactionId("0xtx")
        executor, sleep = make_executor(client)

        tx_id = await executor.submit(OPERATION, SIGNER)

        assert tx_id == "0xtx"
        client.submit_once.assert_awaited_once_with(OPERATION, SIGNER)
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retries_with_exponential_backoff(self):
        client = AsyncMock()
        client.submit_once.side_effect = [
            ConnectionError("node down"),
            ConnectionError("node down"),
            TransactionId("0xtx"),
        ]
        executor, sleep = make_executor(client)

        tx_id = await executor.submit(OPERATION, SIGNER)

        assert tx_id == "0xtx"
        assert client.submit_once.await_count == 3
        assert sleep.await_args_list == [call(1.0), call(2.0)]

    @pytest.mark.asyncio
    async def test_exhaustion_raises_with_last_error(self):
        client = AsyncMock()
        errors = [RuntimeError("first"), RuntimeError("second"), RuntimeError("last")]
        client.submit_once.side_effect = errors
        executor, sleep = make_executor(client)

        with pytest.raises(SubmissionFailedError) as exc_info:
            await executor.submit(OPERATION, SIGNER)

        error = exc_info.value
        assert isinstance(error, ExhaustedRetriesError)
        assert error.attempts == 3
        assert error.last_error is errors[-1]
        assert error.__cause__ is errors[-1]
        # No wait after the final attempt
        assert sleep.await_args_list == [call(1.0), call(2.0)]

    @pytest.mark.asyncio
    async def test_configured_attempts_and_base_delay(self):
        client = AsyncMock()
        client.submit_once.side_effect = ConnectionError("down")
        executor, sleep = make_executor(client, max_attempts=4, base_delay=0.5)

        with pytest.raises(SubmissionFailedError):
            await executor.submit(OPERATION, SIGNER)

        assert client.submit_once.await_count == 4
        assert sleep.await_args_list == [call(0.5), call(1.0), call(2.0)]

    @pytest.mark.asyncio
    async def test_timeout_counts_as_failed_attempt(self):
        calls = 0

        async def slow_then_fast(operation, signer):
            nonlocal calls
            calls += 1
            if calls == 1:
                await asyncio.sleep(10)
            return TransactionId("0xtx")

        client = AsyncMock()
        client.submit_once.side_effect = slow_then_fast
        executor, sleep = make_executor(client, attempt_timeout=0.01)

        tx_id = await executor.submit(OPERATION, SIGNER)

        assert tx_id == "0xtx"
        assert calls == 2
        sleep.assert_awaited_once_with(1.0)

    def test_backoff_delay(self):
        executor = LedgerTransactionExecutor(client=AsyncMock())
        assert [executor.backoff_delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]


class TestReads:
    @pytest.mark.asyncio
    async def test_get_by_reference_returns_none_when_unknown(self):
        client = AsyncMock()
        client.query.return_value = []
        executor, _ = make_executor(client)

        assert await executor.get_by_reference("24EU12345678901234564") is None
        client.get_object.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_by_reference_reads_created_object(self):
        client = AsyncMock()
        client.query.return_value = [
            LedgerEvent(
                transaction_id=TransactionId("0xtx"),
                kind=OperationKind.CREATE_CONSIGNMENT,
                timestamp=datetime(2024, 1, 1, tzinfo=UTC),
                reference="24EU12345678901234564",
                object_id="0xobj",
            )
        ]
        client.get_object.return_value = {"arc": "24EU12345678901234564"}
        executor, _ = make_executor(client)

        record = await executor.get_by_reference("24EU12345678901234564")

        assert record == {"arc": "24EU12345678901234564"}
        client.get_object.assert_awaited_once_with("0xobj")
        query = client.query.await_args.args[0]
        assert query == EventFilter(
            reference="24EU12345678901234564", kind=OperationKind.CREATE_CONSIGNMENT
        )

    @pytest.mark.asyncio
    async def test_get_by_party_empty(self):
        client = AsyncMock()
        client.query.return_value = []
        executor, _ = make_executor(client)

        assert await executor.get_by_party("0xabc") == []

    @pytest.mark.asyncio
    async def test_query_events_passthrough(self):
        client = AsyncMock()
        client.query.return_value = []
        executor, _ = make_executor(client)

        assert await executor.query_events(EventFilter()) == []
        client.query.assert_awaited_once_with(EventFilter())
