from dishka import AsyncContainer, from_context, make_async_container

from emcs.config import Config
from emcs.domain.consignment.util.di import ConsignmentProvider
from emcs.infrastructure.ledger import LedgerProvider
from emcs.infrastructure.persistence import PersistenceProvider
from emcs.infrastructure.registry import RegistryProvider
from emcs.util.di.base import Provider, get_provider
from emcs.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    ledger_provider = get_provider(LedgerProvider, use_mock=config.ledger.stub)

    return make_async_container(
        ConfigProvider(),
        ledger_provider(),
        PersistenceProvider(),
        RegistryProvider(),
        ConsignmentProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
