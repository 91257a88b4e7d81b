from decimal import Decimal

import logfire

from emcs.domain.consignment.model.value import (
    BeerDetails,
    ConsignmentStatus,
    TransportDetails,
)
from emcs.domain.consignment.port.party_directory import PartyDirectory
from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle, validate_creation
from emcs.domain.shared.command import Command, CommandHandler, Result
from emcs.domain.shared.error import AuthorizationError


class CreateConsignment(Command):
    sender: str
    receiver: str
    goods_category: str
    quantity: float
    unit: str
    origin: str | None = None
    destination: str | None = None
    transport: TransportDetails | None = None
    beer: BeerDetails | None = None


class ConsignmentCreated(Result):
    reference: str
    transaction_id: str
    status: ConsignmentStatus
    excise_duty: Decimal | None = None


class CreateConsignmentHandler(CommandHandler[CreateConsignment, ConsignmentCreated]):
    lifecycle: ConsignmentLifecycle
    party_directory: PartyDirectory

    async def run(self, cmd: CreateConsignment) -> ConsignmentCreated:
        with logfire.span("CreateConsignment"):
            category, _ = validate_creation(
                cmd.sender,
                cmd.receiver,
                cmd.goods_category,
                cmd.quantity,
                cmd.unit,
                beer=cmd.beer,
            )

            operator = await self.party_directory.lookup(cmd.sender)
            if operator is None:
                raise AuthorizationError(f"Sender is not a registered operator: {cmd.sender}")
            if not operator.may_move(category):
                raise AuthorizationError(
                    f"Operator {operator.excise_number} is not authorized for {category}"
                )

            transition = await self.lifecycle.create(
                sender=cmd.sender,
                receiver=cmd.receiver,
                goods_category=cmd.goods_category,
                quantity=cmd.quantity,
                unit=cmd.unit,
                origin=cmd.origin,
                destination=cmd.destination,
                transport=cmd.transport,
                beer=cmd.beer,
            )
            logfire.info(
                "Consignment created",
                reference=str(transition.consignment.reference),
                transaction_id=transition.transaction_id,
            )

            return ConsignmentCreated(
                reference=str(transition.consignment.reference),
                transaction_id=transition.transaction_id,
                status=transition.consignment.status,
                excise_duty=transition.consignment.excise_duty,
            )
