import re
from enum import StrEnum
from typing import NewType

from pydantic import Field, PositiveInt

from emcs.domain.shared.model.value import ValueObject

PartyId = NewType("PartyId", str)

# Ledger account address: 0x followed by hex digits
_ADDRESS = re.compile(r"^0x[0-9a-fA-F]+$")


def is_valid_address(value: str) -> bool:
    return _ADDRESS.fullmatch(value) is not None


class ConsignmentStatus(StrEnum):
    DRAFT = "Draft"
    IN_TRANSIT = "In Transit"
    RECEIVED = "Received"


class GoodsCategory(StrEnum):
    WINE = "Wine"
    BEER = "Beer"
    SPIRITS = "Spirits"
    TOBACCO = "Tobacco"
    ENERGY = "Energy"


class Unit(StrEnum):
    LITERS = "Liters"
    KILOGRAMS = "Kilograms"
    UNITS = "Units"


class MovementEventType(StrEnum):
    CREATED = "Created"
    DISPATCHED = "Dispatched"
    RECEIVED = "Received"


class TransportMode(StrEnum):
    ROAD = "Road"
    RAIL = "Rail"
    SEA = "Sea"


class TransportDetails(ValueObject):
    """How the goods travel. A movement may combine several modes."""

    modes: list[TransportMode] = Field(min_length=1)
    vehicle_license_plate: str | None = None
    container_number: str | None = None


class BeerPackaging(ValueObject):
    can_size_ml: PositiveInt
    cans_per_package: PositiveInt
    number_of_packages: PositiveInt

    @property
    def total_cans(self) -> int:
        return self.cans_per_package * self.number_of_packages

    @property
    def total_liters(self) -> float:
        return self.total_cans * self.can_size_ml / 1000


class BeerDetails(ValueObject):
    name: str = Field(min_length=1)
    alcohol_percentage: float = Field(ge=0, le=100)
    packaging: BeerPackaging | None = None
