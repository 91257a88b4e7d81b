"""Unit tests for JsonRpcLedgerClient adapter."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from emcs.domain.ledger.model.value import EventFilter, LedgerOperation, OperationKind
from emcs.domain.shared.error import ExternalServiceError
from emcs.infrastructure.ledger.rpc import JsonRpcLedgerClient

URL = "https://ledger.example.com/rpc"


def rpc_client(body: dict) -> tuple[JsonRpcLedgerClient, AsyncMock]:
    response = MagicMock(spec=httpx.Response)
    response.json.return_value = body
    response.raise_for_status = MagicMock()

    client = AsyncMock(spec=httpx.AsyncClient)
    client.post.return_value = response
    return JsonRpcLedgerClient(client=client, url=URL, package_id="0xpkg"), client


class TestJsonRpcLedgerClient:
    @pytest.mark.asyncio
    async def test_submit_returns_digest(self):
        ledger, http = rpc_client({"jsonrpc": "2.0", "id": 1, "result": {"digest": "0xtx"}})
        operation = LedgerOperation(kind=OperationKind.RECEIVE_CONSIGNMENT, arguments={"arc": "X"})

        tx_id = await ledger.submit_once(operation, "0xb2")

        assert tx_id == "0xtx"
        payload = http.post.await_args.kwargs["json"]
        assert http.post.await_args.args == (URL,)
        assert payload["method"] == "ledger_submitTransaction"
        assert payload["params"] == [
            {"package": "0xpkg", "function": "receive_consignment", "arguments": {"arc": "X"}},
            "0xb2",
        ]

    @pytest.mark.asyncio
    async def test_rpc_error_raises(self):
        ledger, _ = rpc_client({"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "gas"}})
        operation = LedgerOperation(kind=OperationKind.ANCHOR_HASH)

        with pytest.raises(ExternalServiceError, match="gas"):
            await ledger.submit_once(operation, "")

    @pytest.mark.asyncio
    async def test_missing_digest_raises(self):
        ledger, _ = rpc_client({"jsonrpc": "2.0", "id": 1, "result": {}})

        with pytest.raises(ExternalServiceError):
            await ledger.submit_once(LedgerOperation(kind=OperationKind.ANCHOR_HASH), "")

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        ledger, http = rpc_client({})
        response = MagicMock(spec=httpx.Response)
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Bad Gateway",
            request=MagicMock(),
            response=MagicMock(status_code=502),
        )
        http.post.return_value = response

        with pytest.raises(httpx.HTTPStatusError):
            await ledger.get_object("0xobj")

    @pytest.mark.asyncio
    async def test_query_parses_events(self):
        ledger, http = rpc_client(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "result": {
                    "data": [
                        {
                            "transaction_id": "0xtx",
                            "kind": "create_consignment",
                            "timestamp": "2024-03-01T12:00:00Z",
                            "reference": "24EU12345678901234564",
                            "object_id": "0xobj",
                        }
                    ]
                },
            }
        )

        events = await ledger.query(EventFilter(reference="24EU12345678901234564"))

        assert [e.object_id for e in events] == ["0xobj"]
        assert http.post.await_args.kwargs["json"]["params"] == [
            {"reference": "24EU12345678901234564"}
        ]

    @pytest.mark.asyncio
    async def test_empty_results(self):
        ledger, _ = rpc_client({"jsonrpc": "2.0", "id": 1, "result": None})

        assert await ledger.query(EventFilter()) == []
        assert await ledger.get_object("0xobj") is None
