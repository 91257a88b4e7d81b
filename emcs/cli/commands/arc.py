"""Administrative Reference Code commands."""

import asyncio
import sys

import cyclopts

from emcs.application.di import create_container
from emcs.cli.console import get_console
from emcs.domain.reference.service.reference import (
    ReferenceCodeGenerator,
    is_well_formed,
    parse,
    verify_check_digit,
)
from emcs.domain.shared.error import ExhaustedRetriesError

app = cyclopts.App(name="arc", help="Issue and inspect ARCs")


async def _generate() -> str:
    container = create_container()
    try:
        generator = await container.get(ReferenceCodeGenerator)
        return str(await generator.generate())
    finally:
        await container.close()


@app.command
def generate() -> None:
    """Issue a new ARC, checking uniqueness against the configured ledger."""
    console = get_console()
    try:
        code = asyncio.run(_generate())
    except ExhaustedRetriesError as e:
        console.error(e.message, hint="The ledger already holds every candidate tried")
        sys.exit(1)
    console.print(code)


@app.command
def check(code: str) -> None:
    """Check an ARC's format and check digit.

    Args:
        code: The reference code to inspect.
    """
    console = get_console()
    if not is_well_formed(code):
        console.error(f"Malformed ARC: {code}", hint="Expected 10-30 uppercase letters/digits")
        sys.exit(1)

    components = parse(code)
    if components is None:
        console.success(f"{code} is well-formed (not in issued layout)")
        return

    console.fields(
        {
            "Year": components.year,
            "Country": components.country_code,
            "Random": components.random_number,
            "Check digit": components.check_digit,
            "Checksum": "valid" if verify_check_digit(code) else "INVALID",
        },
        title=code,
    )
    if not verify_check_digit(code):
        sys.exit(1)
