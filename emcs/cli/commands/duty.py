"""Excise duty commands."""

import sys

import cyclopts

from emcs.cli.console import get_console
from emcs.domain.consignment.service.duty import duty_breakdown

app = cyclopts.App(name="duty", help="Excise duty calculations")


@app.command
def beer(liters: float, abv: float) -> None:
    """Show the Irish excise duty on a volume of beer.

    Args:
        liters: Volume in litres.
        abv: Alcohol by volume, in percent (e.g. 4.5).
    """
    console = get_console()
    try:
        breakdown = duty_breakdown(liters, abv)
    except ValueError as e:
        console.error(str(e))
        sys.exit(1)

    band = "<=" if breakdown.reduced_rate else ">"
    console.fields(
        {
            "Volume": f"{breakdown.volume_liters} l ({breakdown.hectolitres} hl)",
            "ABV": f"{breakdown.abv}%",
            "Rate": f"€{breakdown.rate_per_hl} per hl (ABV {band} 2.8%)",
            "Duty": breakdown.formatted,
        },
        title="Beer excise duty",
    )
