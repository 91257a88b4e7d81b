"""DI providers for ledger access (stub or JSON-RPC)."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from emcs.config import Config
from emcs.domain.ledger.port.client import LedgerClient
from emcs.domain.ledger.service.executor import LedgerTransactionExecutor
from emcs.domain.shared.error import ConfigurationError
from emcs.infrastructure.ledger.rpc import JsonRpcLedgerClient
from emcs.infrastructure.ledger.stub import StubLedgerClient
from emcs.util.di.base import Provider
from emcs.util.di.scope import Scope

LedgerHttpClient = NewType("LedgerHttpClient", httpx.AsyncClient)


class LedgerProvider(Provider):
    """Ledger component; concrete client chosen by get_provider(use_mock=config.ledger.stub)."""

    __mock_component__ = "ledger"

    @provide(scope=Scope.APP)
    def get_executor(self, client: LedgerClient, config: Config) -> LedgerTransactionExecutor:
        return LedgerTransactionExecutor(
            client=client,
            max_attempts=config.ledger.max_attempts,
            base_delay=config.ledger.base_delay,
            attempt_timeout=config.ledger.attempt_timeout,
        )


class StubLedgerProvider(LedgerProvider):
    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_client(self) -> LedgerClient:
        return StubLedgerClient()


class RpcLedgerProvider(LedgerProvider):
    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterable[LedgerHttpClient]:
        async with httpx.AsyncClient(timeout=config.ledger.request_timeout) as client:
            yield LedgerHttpClient(client)

    @provide(scope=Scope.APP)
    def get_client(self, http: LedgerHttpClient, config: Config) -> LedgerClient:
        if not config.ledger.package_id:
            raise ConfigurationError(
                "ledger.package_id must be set when the stub ledger is disabled",
                code="MISSING_PACKAGE_ID",
            )
        return JsonRpcLedgerClient(
            client=http,
            url=config.ledger.rpc_url,
            package_id=config.ledger.package_id,
        )
