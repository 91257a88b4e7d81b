"""Irish excise duty on beer.

Duty is ``rate per hectolitre x hectolitres x ABV``, with a reduced rate at or
below 2.8% ABV. Amounts are euros rounded half-up to the cent.
"""

from decimal import ROUND_HALF_UP, Decimal

from emcs.domain.shared.model.value import ValueObject

STANDARD_RATE_PER_HL = Decimal("22.55")
REDUCED_RATE_PER_HL = Decimal("11.27")
REDUCED_RATE_MAX_ABV = Decimal("2.8")

_CENT = Decimal("0.01")


class DutyBreakdown(ValueObject):
    volume_liters: Decimal
    hectolitres: Decimal
    abv: Decimal
    rate_per_hl: Decimal
    reduced_rate: bool
    duty: Decimal

    @property
    def formatted(self) -> str:
        return f"€{self.duty:.2f}"


def _decimal(value: float | int | Decimal) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def rate_for(abv: float | Decimal) -> Decimal:
    return REDUCED_RATE_PER_HL if _decimal(abv) <= REDUCED_RATE_MAX_ABV else STANDARD_RATE_PER_HL


def calculate_irish_beer_duty(quantity_liters: float | Decimal, abv: float | Decimal) -> Decimal:
    """Duty in euros for ``quantity_liters`` of beer at ``abv`` percent."""
    if _decimal(quantity_liters) < 0 or _decimal(abv) < 0:
        raise ValueError("Volume and ABV must not be negative")
    hectolitres = _decimal(quantity_liters) / 100
    duty = rate_for(abv) * hectolitres * _decimal(abv)
    return duty.quantize(_CENT, rounding=ROUND_HALF_UP)


def duty_breakdown(quantity_liters: float | Decimal, abv: float | Decimal) -> DutyBreakdown:
    volume = _decimal(quantity_liters)
    rate = rate_for(abv)
    return DutyBreakdown(
        volume_liters=volume,
        hectolitres=(volume / 100).quantize(_CENT, rounding=ROUND_HALF_UP),
        abv=_decimal(abv),
        rate_per_hl=rate,
        reduced_rate=rate == REDUCED_RATE_PER_HL,
        duty=calculate_irish_beer_duty(volume, abv),
    )
