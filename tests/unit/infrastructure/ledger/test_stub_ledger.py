import re

import pytest

from emcs.domain.ledger.model.value import EventFilter, LedgerOperation, OperationKind
from emcs.infrastructure.ledger.stub import StubLedgerClient

ARC = "24EU12345678901234564"
DIGEST = re.compile(r"^0x[0-9a-f]{64}$")


def create_op() -> LedgerOperation:
    return LedgerOperation(
        kind=OperationKind.CREATE_CONSIGNMENT,
        arguments={"arc": ARC, "consignor": "0xa1", "consignee": "0xb2", "quantity": 10.0},
    )


class TestStubLedgerClient:
    @pytest.mark.asyncio
    async def test_returns_synthetic_digests(self, ledger: StubLedgerClient):
        first = await ledger.submit_once(create_op(), "0xa1")
        second = await ledger.submit_once(create_op(), "0xa1")

        assert DIGEST.match(first)
        assert first != second

    @pytest.mark.asyncio
    async def test_create_then_dispatch_updates_object(self, ledger: StubLedgerClient):
        await ledger.submit_once(create_op(), "0xa1")
        await ledger.submit_once(
            LedgerOperation(
                kind=OperationKind.DISPATCH_CONSIGNMENT,
                arguments={"arc": ARC, "document_hash": "0xhash"},
            ),
            "0xa1",
        )

        [event] = await ledger.query(
            EventFilter(reference=ARC, kind=OperationKind.CREATE_CONSIGNMENT)
        )
        record = await ledger.get_object(event.object_id)

        assert record["arc"] == ARC
        assert record["status"] == 1
        assert record["document_hash"] == "0xhash"

    @pytest.mark.asyncio
    async def test_query_by_party(self, ledger: StubLedgerClient):
        await ledger.submit_once(create_op(), "0xa1")

        assert len(await ledger.query(EventFilter(party="0xb2"))) == 1
        assert await ledger.query(EventFilter(party="0xc3")) == []

    @pytest.mark.asyncio
    async def test_anchor_stored_under_transaction(self, ledger: StubLedgerClient):
        tx_id = await ledger.submit_once(
            LedgerOperation(kind=OperationKind.ANCHOR_HASH, arguments={"document_hash": "0xabc"}),
            "",
        )

        record = await ledger.get_object(tx_id)
        assert record["document_hash"] == "0xabc"

    @pytest.mark.asyncio
    async def test_unknown_object(self, ledger: StubLedgerClient):
        assert await ledger.get_object("0xmissing") is None

    @pytest.mark.asyncio
    async def test_returned_objects_are_copies(self, ledger: StubLedgerClient):
        await ledger.submit_once(create_op(), "0xa1")
        [event] = await ledger.query(EventFilter(reference=ARC))

        record = await ledger.get_object(event.object_id)
        record["status"] = 99

        assert (await ledger.get_object(event.object_id))["status"] == 0
