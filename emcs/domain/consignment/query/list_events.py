from emcs.domain.consignment.event.movement import MovementEvent
from emcs.domain.consignment.service.lifecycle import ConsignmentLifecycle
from emcs.domain.reference.service.reference import require_well_formed
from emcs.domain.shared.query import Query, QueryHandler, Result


class ListMovementEvents(Query):
    reference: str


class MovementHistory(Result):
    reference: str
    events: list[MovementEvent]


class ListMovementEventsHandler(QueryHandler[ListMovementEvents, MovementHistory]):
    lifecycle: ConsignmentLifecycle

    async def run(self, query: ListMovementEvents) -> MovementHistory:
        reference = require_well_formed(query.reference)
        events = await self.lifecycle.list_events(reference)
        return MovementHistory(reference=reference, events=events)
