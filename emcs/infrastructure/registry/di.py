from dishka import provide

from emcs.config import Config
from emcs.domain.consignment.port.party_directory import PartyDirectory
from emcs.infrastructure.registry.party_directory import StaticPartyDirectory
from emcs.util.di.base import Provider
from emcs.util.di.scope import Scope


class RegistryProvider(Provider):
    @provide(scope=Scope.APP)
    def get_party_directory(self, config: Config) -> PartyDirectory:
        return StaticPartyDirectory.from_config(config.registry)
