from dishka import provide

from emcs.config import Config
from emcs.domain.consignment.port.event_log import MovementEventLog
from emcs.domain.consignment.port.store import ConsignmentStore
from emcs.infrastructure.persistence.json_file import JsonFileConsignmentStore
from emcs.infrastructure.persistence.memory import InMemoryConsignmentStore
from emcs.util.di.base import Provider
from emcs.util.di.scope import Scope


class PersistenceProvider(Provider):
    @provide(scope=Scope.APP)
    def get_store(self, config: Config) -> InMemoryConsignmentStore:
        if config.storage.backend == "json":
            return JsonFileConsignmentStore(config.storage.data_dir)
        return InMemoryConsignmentStore()

    @provide(scope=Scope.APP)
    def get_consignment_store(self, store: InMemoryConsignmentStore) -> ConsignmentStore:
        return store

    @provide(scope=Scope.APP)
    def get_event_log(self, store: InMemoryConsignmentStore) -> MovementEventLog:
        return store
