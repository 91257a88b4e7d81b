from emcs.domain.consignment.event.movement import MovementEvent

__all__ = ["MovementEvent"]
