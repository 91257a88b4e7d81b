from dishka import provide

from emcs.config import Config
from emcs.domain.consignment.command.create import CreateConsignmentHandler
from emcs.domain.consignment.command.dispatch import DispatchConsignmentHandler
from emcs.domain.consignment.command.receive import ReceiveConsignmentHandler
from emcs.domain.consignment.port.event_log import MovementEventLog
from emcs.domain.consignment.port.store import ConsignmentStore
from emcs.domain.consignment.query.get_consignment import GetConsignmentHandler
from emcs.domain.consignment.query.get_operator import GetOperatorHandler
from emcs.domain.consignment.query.list_consignments import ListConsignmentsHandler
from emcs.domain.consignment.query.list_events import ListMovementEventsHandler
from emcs.domain.consignment.query.list_operators import ListOperatorsHandler
from emcs.domain.consignment.query.reconcile import ReconcileConsignmentHandler
from emcs.domain.consignment.query.verify_document import VerifyDocumentHandler
from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.ledger.service.executor import LedgerTransactionExecutor
from emcs.domain.notarization.service.notarizer import DocumentNotarizer
from emcs.domain.reference.service.reference import ReferenceCodeGenerator
from emcs.util.di.base import Provider
from emcs.util.di.scope import Scope


class ConsignmentProvider(Provider):
    # Command handlers
    create_handler = provide(CreateConsignmentHandler, scope=Scope.UOW)
    dispatch_handler = provide(DispatchConsignmentHandler, scope=Scope.UOW)
    receive_handler = provide(ReceiveConsignmentHandler, scope=Scope.UOW)

    # Query handlers
    get_handler = provide(GetConsignmentHandler, scope=Scope.UOW)
    list_handler = provide(ListConsignmentsHandler, scope=Scope.UOW)
    events_handler = provide(ListMovementEventsHandler, scope=Scope.UOW)
    reconcile_handler = provide(ReconcileConsignmentHandler, scope=Scope.UOW)
    verify_handler = provide(VerifyDocumentHandler, scope=Scope.UOW)
    operators_handler = provide(ListOperatorsHandler, scope=Scope.UOW)
    operator_handler = provide(GetOperatorHandler, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_reference_generator(
        self, executor: LedgerTransactionExecutor, config: Config
    ) -> ReferenceCodeGenerator:
        return ReferenceCodeGenerator(
            lookup=executor,
            country_code=config.reference.country_code,
            max_attempts=config.reference.max_attempts,
        )

    @provide(scope=Scope.APP)
    def get_notarizer(self, executor: LedgerTransactionExecutor) -> DocumentNotarizer:
        return DocumentNotarizer(executor=executor)

    @provide(scope=Scope.APP)
    def get_lifecycle(
        self,
        store: ConsignmentStore,
        event_log: MovementEventLog,
        reference_generator: ReferenceCodeGenerator,
        executor: LedgerTransactionExecutor,
        notarizer: DocumentNotarizer,
    ) -> ConsignmentLifecycle:
        return ConsignmentLifecycle(
            store=store,
            event_log=event_log,
            reference_generator=reference_generator,
            executor=executor,
            notarizer=notarizer,
        )
