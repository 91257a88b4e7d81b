from emcs.domain.consignment.model.value import is_valid_address
from emcs.domain.consignment.port.party_directory import PartyDirectory, PartyInfo
from emcs.domain.shared.error import NotFoundError, ValidationError
from emcs.domain.shared.query import Query, QueryHandler, Result


class GetOperator(Query):
    address: str


class OperatorDetail(Result):
    operator: PartyInfo


class GetOperatorHandler(QueryHandler[GetOperator, OperatorDetail]):
    party_directory: PartyDirectory

    async def run(self, query: GetOperator) -> OperatorDetail:
        if not is_valid_address(query.address):
            raise ValidationError("Invalid wallet address format", field="address")
        operator = await self.party_directory.lookup(query.address)
        if operator is None:
            raise NotFoundError(f"Operator not found in registry: {query.address}")
        return OperatorDetail(operator=operator)
