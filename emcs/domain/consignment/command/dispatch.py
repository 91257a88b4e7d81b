from datetime import datetime

import logfire

from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.reference.service.reference import require_well_formed
from emcs.domain.shared.command import Command, CommandHandler, Result


class DispatchConsignment(Command):
    reference: str
    requester: str


class ConsignmentDispatched(Result):
    reference: str
    transaction_id: str
    document_hash: str
    anchor_transaction_id: str
    dispatched_at: datetime


class DispatchConsignmentHandler(CommandHandler[DispatchConsignment, ConsignmentDispatched]):
    lifecycle: ConsignmentLifecycle

    async def run(self, cmd: DispatchConsignment) -> ConsignmentDispatched:
        with logfire.span("DispatchConsignment"):
            reference = require_well_formed(cmd.reference)
            transition = await self.lifecycle.dispatch(reference, cmd.requester)

            consignment = transition.consignment
            assert transition.notarization is not None
            assert consignment.document_hash is not None
            assert consignment.dispatched_at is not None

            logfire.info(
                "Consignment dispatched",
                reference=reference,
                document_hash=consignment.document_hash,
            )
            return ConsignmentDispatched(
                reference=reference,
                transaction_id=transition.transaction_id,
                document_hash=consignment.document_hash,
                anchor_transaction_id=transition.notarization.ledger_transaction_id,
                dispatched_at=consignment.dispatched_at,
            )
