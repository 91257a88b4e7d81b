from emcs.domain.consignment.port.party_directory import PartyDirectory, PartyInfo
from emcs.domain.shared.query import Query, QueryHandler, Result


class ListOperators(Query):
    pass


class OperatorList(Result):
    operators: list[PartyInfo]


class ListOperatorsHandler(QueryHandler[ListOperators, OperatorList]):
    party_directory: PartyDirectory

    async def run(self, query: ListOperators) -> OperatorList:
        return OperatorList(operators=await self.party_directory.list_all())
