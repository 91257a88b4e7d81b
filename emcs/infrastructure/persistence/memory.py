"""In-memory ConsignmentStore and MovementEventLog."""

import asyncio
from collections import defaultdict

from emcs.domain.consignment.event.movement import MovementEvent
from emcs.domain.consignment.model.aggregate import Consignment
from emcs.domain.consignment.model.value import PartyId
from emcs.domain.consignment.port.event_log import MovementEventLog
from emcs.domain.consignment.port.store import ConsignmentStore
from emcs.domain.shared.error import ConflictError, NotFoundError

ConsignmentMap = dict[str, Consignment]
EventMap = dict[str, list[MovementEvent]]


class InMemoryConsignmentStore(ConsignmentStore, MovementEventLog):
    """Dict-backed storage. Callers always receive copies of stored aggregates.

    Writes are serialized by a single lock. Each write builds the next state,
    hands it to ``_flush`` and only commits it once ``_flush`` returns, so a
    failed flush leaves the previous state in place.
    """

    def __init__(self) -> None:
        self._consignments: ConsignmentMap = {}
        self._events: EventMap = defaultdict(list)
        self._lock = asyncio.Lock()

    async def get(self, reference: str) -> Consignment | None:
        consignment = self._consignments.get(reference)
        return consignment.model_copy(deep=True) if consignment is not None else None

    async def add(self, consignment: Consignment) -> Consignment:
        reference = str(consignment.reference)
        async with self._lock:
            if reference in self._consignments:
                raise ConflictError(f"Consignment already exists: {reference}")
            stored = consignment.model_copy(deep=True, update={"version": 1})
            await self._commit_consignment(reference, stored)
        return stored.model_copy(deep=True)

    async def put(self, consignment: Consignment) -> Consignment:
        reference = str(consignment.reference)
        async with self._lock:
            current = self._consignments.get(reference)
            if current is None:
                raise NotFoundError(f"Consignment not found: {reference}")
            if current.version != consignment.version:
                raise ConflictError(
                    f"Consignment {reference} was modified concurrently "
                    f"(stored version {current.version}, got {consignment.version})"
                )
            stored = consignment.model_copy(
                deep=True, update={"version": consignment.version + 1}
            )
            await self._commit_consignment(reference, stored)
        return stored.model_copy(deep=True)

    async def list_by_party(self, party: PartyId) -> list[Consignment]:
        return [
            c.model_copy(deep=True) for c in self._consignments.values() if c.involves(party)
        ]

    async def append(self, event: MovementEvent) -> None:
        reference = str(event.reference)
        async with self._lock:
            events: EventMap = defaultdict(list, self._events)
            events[reference] = [*self._events.get(reference, []), event]
            await self._flush(self._consignments, events)
            self._events = events

    async def list_for(self, reference: str) -> list[MovementEvent]:
        return list(self._events.get(reference, []))

    async def _commit_consignment(self, reference: str, stored: Consignment) -> None:
        consignments = {**self._consignments, reference: stored}
        await self._flush(consignments, self._events)
        self._consignments = consignments

    async def _flush(self, consignments: ConsignmentMap, events: EventMap) -> None:
        """Persist the next state. Raising here aborts the write."""
