from emcs.domain.consignment.model.aggregate import Consignment
from emcs.domain.consignment.port.party_directory import PartyDirectory, PartyInfo
from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.reference.service.reference import require_well_formed
from emcs.domain.shared.query import Query, QueryHandler, Result


class GetConsignment(Query):
    reference: str


class ConsignmentDetail(Result):
    consignment: Consignment
    sender_info: PartyInfo | None = None
    receiver_info: PartyInfo | None = None


class GetConsignmentHandler(QueryHandler[GetConsignment, ConsignmentDetail]):
    lifecycle: ConsignmentLifecycle
    party_directory: PartyDirectory

    async def run(self, query: GetConsignment) -> ConsignmentDetail:
        consignment = await self.lifecycle.get(require_well_formed(query.reference))
        return ConsignmentDetail(
            consignment=consignment,
            sender_info=await self.party_directory.lookup(consignment.sender),
            receiver_info=await self.party_directory.lookup(consignment.receiver),
        )
