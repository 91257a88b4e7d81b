from datetime import datetime

import logfire

from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.reference.service.reference import require_well_formed
from emcs.domain.shared.command import Command, CommandHandler, Result


class ReceiveConsignment(Command):
    reference: str
    requester: str


class ConsignmentReceived(Result):
    reference: str
    transaction_id: str
    received_at: datetime


class ReceiveConsignmentHandler(CommandHandler[ReceiveConsignment, ConsignmentReceived]):
    lifecycle: ConsignmentLifecycle

    async def run(self, cmd: ReceiveConsignment) -> ConsignmentReceived:
        with logfire.span("ReceiveConsignment"):
            reference = require_well_formed(cmd.reference)
            transition = await self.lifecycle.receive(reference, cmd.requester)

            received_at = transition.consignment.received_at
            assert received_at is not None

            logfire.info("Consignment received", reference=reference)
            return ConsignmentReceived(
                reference=reference,
                transaction_id=transition.transaction_id,
                received_at=received_at,
            )
