from emcs.domain.consignment.model.aggregate import Consignment
from emcs.domain.consignment.model.value import ConsignmentStatus, is_valid_address
from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.shared.error import ValidationError
from emcs.domain.shared.query import Query, QueryHandler, Result


class ListConsignments(Query):
    party: str
    status: ConsignmentStatus | None = None


class ConsignmentList(Result):
    items: list[Consignment]
    total: int


class ListConsignmentsHandler(QueryHandler[ListConsignments, ConsignmentList]):
    lifecycle: ConsignmentLifecycle

    async def run(self, query: ListConsignments) -> ConsignmentList:
        if not is_valid_address(query.party):
            raise ValidationError(f"Invalid address format: {query.party}", field="party")
        items = await self.lifecycle.list_by_party(query.party, status=query.status)
        return ConsignmentList(items=items, total=len(items))
