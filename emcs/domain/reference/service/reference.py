"""Administrative Reference Code issuance.

Format: ``YYCCNNNNNNNNNNNNNNNNC``

- ``YY``: last two digits of the issuing year
- ``CC``: jurisdiction code (two letters)
- ``N``: 16 random digits
- ``C``: Luhn-style check digit over the preceding characters
"""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime

from emcs.domain.reference.model.value import (
    ISSUED_LENGTH,
    ISSUED_PATTERN,
    ReferenceCode,
    ReferenceComponents,
    is_well_formed,
)
from emcs.domain.reference.port.lookup import ReferenceLookup
from emcs.domain.shared.error import ExhaustedRetriesError, ValidationError
from emcs.domain.shared.service import Service

logger = logging.getLogger(__name__)

RANDOM_DIGITS = 16


def character_value(char: str) -> int:
    """Map ``0-9`` to themselves and ``A-Z`` to 10-35."""
    if char.isdigit():
        return int(char)
    if "A" <= char <= "Z":
        return ord(char) - ord("A") + 10
    raise ValueError(f"Unsupported character in reference code: {char!r}")


def luhn_check_digit(candidate: str) -> int:
    """Compute the check digit for ``candidate`` (alphanumeric Luhn variant).

    Walking from the rightmost character, every second value (starting with
    the rightmost) is doubled and reduced by 9 when it exceeds 9.
    """
    total = 0
    double = True
    for char in reversed(candidate):
        value = character_value(char)
        if double:
            value *= 2
            if value > 9:
                value -= 9
        total += value
        double = not double
    return (10 - (total % 10)) % 10


def verify_check_digit(code: str) -> bool:
    """Strict check of an issued code: exact shape and matching check digit."""
    if len(code) != ISSUED_LENGTH or ISSUED_PATTERN.fullmatch(code) is None:
        return False
    return luhn_check_digit(code[:-1]) == int(code[-1])


def parse(code: str) -> ReferenceComponents | None:
    """Split an issued code into its components, or None if it is not in issued layout."""
    if ISSUED_PATTERN.fullmatch(code) is None:
        return None
    return ReferenceComponents(
        year=code[0:2],
        country_code=code[2:4],
        random_number=code[4:20],
        check_digit=code[20:21],
    )


def _random_digits(length: int) -> str:
    return "".join(str(secrets.randbelow(10)) for _ in range(length))


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ReferenceCodeGenerator(Service):
    """Mints unique ARCs, retrying on collision.

    Uniqueness is checked through ``lookup``. If the lookup itself fails the
    candidate is treated as unused so issuance is never blocked by an
    unreachable ledger; a later collision would be caught by the store's
    conditional insert.
    """

    lookup: ReferenceLookup
    country_code: str = "EU"
    max_attempts: int = 5
    random_digits: Callable[[int], str] = _random_digits
    clock: Callable[[], datetime] = _utc_now

    def compose(self) -> str:
        """Build one candidate code (not checked for uniqueness)."""
        year = f"{self.clock().year % 100:02d}"
        body = f"{year}{self.country_code}{self.random_digits(RANDOM_DIGITS)}"
        return f"{body}{luhn_check_digit(body)}"

    async def generate(self) -> ReferenceCode:
        for attempt in range(1, self.max_attempts + 1):
            code = self.compose()
            if not await self._exists(code):
                logger.info("Generated unique ARC: %s", code)
                return ReferenceCode(code)
            logger.warning(
                "ARC collision detected (attempt %d/%d), regenerating",
                attempt,
                self.max_attempts,
            )

        raise ExhaustedRetriesError(
            f"Failed to generate unique ARC after {self.max_attempts} attempts",
            attempts=self.max_attempts,
        )

    async def _exists(self, code: str) -> bool:
        try:
            return await self.lookup.get_by_reference(code) is not None
        except Exception:
            # Lookup failure counts as "unused"
            logger.exception("ARC uniqueness check failed for %s, assuming unused", code)
            return False


def require_well_formed(code: str) -> str:
    """Return ``code`` unchanged, or raise ValidationError if it is malformed."""
    if not is_well_formed(code):
        raise ValidationError("Invalid ARC format", field="reference")
    return code
