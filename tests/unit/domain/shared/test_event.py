from datetime import UTC, datetime
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from emcs.domain.consignment.event.movement import MovementEvent
from emcs.domain.consignment.model.value import MovementEventType, PartyId
from emcs.domain.ledger.model.value import TransactionId
from emcs.domain.reference.model.value import ReferenceCode
from emcs.domain.shared.event import Event, EventId


def make_event() -> MovementEvent:
    return MovementEvent(
        id=EventId(uuid4()),
        reference=ReferenceCode("24EU12345678901234564"),
        type=MovementEventType.CREATED,
        timestamp=datetime(2024, 3, 1, tzinfo=UTC),
        actor=PartyId("0xa1"),
        ledger_transaction_id=TransactionId("0xtx"),
    )


class TestEvent:
    def test_subclasses_are_registered(self):
        assert Event.resolve("MovementEvent") is MovementEvent

    def test_unknown_name(self):
        with pytest.raises(KeyError, match="Unknown event type"):
            Event.resolve("NoSuchEvent")

    def test_events_are_immutable(self):
        event = make_event()
        with pytest.raises(PydanticValidationError):
            event.actor = PartyId("0xb2")

    def test_json_round_trip(self):
        event = make_event()
        assert MovementEvent.model_validate(event.model_dump(mode="json")) == event

    def test_movement_event_has_a_single_time(self):
        event = make_event()
        assert event.created_at == event.timestamp

    def test_reloaded_movement_event_keeps_single_time(self):
        data = make_event().model_dump(mode="json")
        data["created_at"] = "2030-01-01T00:00:00Z"

        reloaded = MovementEvent.model_validate(data)

        assert reloaded.created_at == reloaded.timestamp
