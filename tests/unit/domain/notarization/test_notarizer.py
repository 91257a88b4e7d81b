"""Tests for DocumentNotarizer and the e-AD builder."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from emcs.domain.consignment.model.aggregate import Consignment
from emcs.domain.consignment.model.value import GoodsCategory, PartyId, Unit
from emcs.domain.ledger.model.value import OperationKind, TransactionId
from emcs.domain.ledger.service.executor import LedgerTransactionExecutor
from emcs.domain.notarization.service.canonical import compute_hash
from emcs.domain.notarization.service.document import build_ead_document
from emcs.domain.notarization.service.notarizer import DocumentNotarizer
from emcs.domain.reference.model.value import ReferenceCode
from emcs.domain.shared.error import NotarizationFailedError, SubmissionFailedError
from emcs.infrastructure.ledger.stub import StubLedgerClient

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
DOCUMENT = {"documentType": "e-AD", "arc": "24EU12345678901234564", "goods": {"quantity": 10}}


def make_notarizer(client) -> DocumentNotarizer:
    executor = LedgerTransactionExecutor(client=client, sleep=AsyncMock())
    return DocumentNotarizer(executor=executor, clock=lambda: NOW)


class TestNotarize:
    @pytest.mark.asyncio
    async def test_anchors_hash_and_returns_record(self):
        client = AsyncMock()
        client.submit_once.return_value = TransactionId("0xanchor")
        notarizer = make_notarizer(client)

        record = await notarizer.notarize(DOCUMENT)

        assert record.document_hash == compute_hash(DOCUMENT)
        assert record.ledger_transaction_id == "0xanchor"
        assert record.timestamp == NOW

        operation, signer = client.submit_once.await_args.args
        assert operation.kind == OperationKind.ANCHOR_HASH
        assert operation.arguments == {"document_hash": record.document_hash}
        assert signer == ""

    @pytest.mark.asyncio
    async def test_serialization_failure(self):
        client = AsyncMock()
        notarizer = make_notarizer(client)

        with pytest.raises(NotarizationFailedError) as exc_info:
            await notarizer.notarize({"bad": object()})

        assert isinstance(exc_info.value.__cause__, TypeError)
        client.submit_once.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_anchor_failure_after_retries(self):
        client = AsyncMock()
        client.submit_once.side_effect = ConnectionError("node down")
        notarizer = make_notarizer(client)

        with pytest.raises(NotarizationFailedError) as exc_info:
            await notarizer.notarize(DOCUMENT)

        assert isinstance(exc_info.value.__cause__, SubmissionFailedError)
        assert client.submit_once.await_count == 3

    @pytest.mark.asyncio
    async def test_hash_readable_from_anchor_transaction(self):
        notarizer = make_notarizer(StubLedgerClient(clock=lambda: NOW))

        record = await notarizer.notarize(DOCUMENT)

        assert await notarizer.hash_from_transaction(record.ledger_transaction_id) == (
            record.document_hash
        )
        assert await notarizer.hash_from_transaction("0xunknown") is None


class TestVerify:
    def test_matching_hash(self):
        notarizer = make_notarizer(AsyncMock())
        assert notarizer.verify(DOCUMENT, compute_hash(DOCUMENT))

    def test_key_order_does_not_matter(self):
        notarizer = make_notarizer(AsyncMock())
        reordered = {"goods": {"quantity": 10}, "arc": "24EU12345678901234564", "documentType": "e-AD"}
        assert notarizer.verify(reordered, compute_hash(DOCUMENT))

    def test_mismatch_returns_false(self):
        notarizer = make_notarizer(AsyncMock())
        tampered = {**DOCUMENT, "goods": {"quantity": 11}}
        assert notarizer.verify(tampered, compute_hash(DOCUMENT)) is False

    def test_unserializable_returns_false(self):
        notarizer = make_notarizer(AsyncMock())
        assert notarizer.verify({"bad": object()}, "0x00") is False


class TestBuildEadDocument:
    def test_document_shape(self):
        consignment = Consignment(
            reference=ReferenceCode("24EU12345678901234564"),
            sender=PartyId("0xa1"),
            receiver=PartyId("0xb2"),
            goods_category=GoodsCategory.WINE,
            quantity=750.0,
            unit=Unit.LITERS,
            origin="Bordeaux",
            destination="Dublin",
            created_at=NOW,
        )

        document = build_ead_document(consignment, NOW)

        assert document == {
            "documentType": "e-AD",
            "version": "1.0",
            "arc": "24EU12345678901234564",
            "consignor": "0xa1",
            "consignee": "0xb2",
            "goods": {"type": "Wine", "quantity": 750.0, "unit": "Liters"},
            "movement": {"origin": "Bordeaux", "destination": "Dublin"},
            "timestamp": "2024-03-01T12:00:00+00:00",
        }
