"""JSON-RPC adapter for the LedgerClient port."""

import itertools
from typing import Any

import httpx

from emcs.domain.ledger.model.value import (
    EventFilter,
    LedgerEvent,
    LedgerOperation,
    RawRecord,
    TransactionId,
)
from emcs.domain.ledger.port.client import LedgerClient
from emcs.domain.shared.error import ExternalServiceError


class JsonRpcLedgerClient(LedgerClient):
    """Talks to a ledger gateway node over JSON-RPC 2.0 using httpx.

    The gateway signs on behalf of ``signer``; transport errors are raised
    as-is so the executor can count them as failed attempts.
    """

    def __init__(self, client: httpx.AsyncClient, url: str, package_id: str) -> None:
        self._client = client
        self._url = url
        self._package_id = package_id
        self._ids = itertools.count(1)

    async def submit_once(self, operation: LedgerOperation, signer: str) -> TransactionId:
        result = await self._call(
            "ledger_submitTransaction",
            [
                {
                    "package": self._package_id,
                    "function": str(operation.kind),
                    "arguments": operation.arguments,
                },
                signer,
            ],
        )
        if not isinstance(result, dict) or not result.get("digest"):
            raise ExternalServiceError("Ledger returned no transaction digest")
        return TransactionId(result["digest"])

    async def query(self, filter: EventFilter) -> list[LedgerEvent]:
        result = await self._call(
            "ledger_queryEvents", [filter.model_dump(mode="json", exclude_none=True)]
        )
        if not result:
            return []
        return [LedgerEvent.model_validate(item) for item in result.get("data", [])]

    async def get_object(self, object_id: str) -> RawRecord | None:
        result = await self._call("ledger_getObject", [object_id])
        if not result:
            return None
        return dict(result)

    async def _call(self, method: str, params: list[Any]) -> Any:
        response = await self._client.post(
            self._url,
            json={
                "jsonrpc": "2.0",
                "id": next(self._ids),
                "method": method,
                "params": params,
            },
        )
        response.raise_for_status()
        body = response.json()
        if body.get("error"):
            message = body["error"].get("message", "unknown error")
            raise ExternalServiceError(f"Ledger RPC {method} failed: {message}")
        return body.get("result")
