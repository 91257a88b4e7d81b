import re

from pydantic import field_validator

from emcs.domain.shared.model.value import RootValueObject, ValueObject

# Structural shape accepted at the boundary; the check digit is not
# re-verified here (see verify_check_digit).
_WELL_FORMED = re.compile(r"^[A-Z0-9]{10,30}$")

# Shape of a code as issued: YY + CC + 16 digits + check digit
ISSUED_PATTERN = re.compile(r"^\d{2}[A-Z]{2}\d{17}$")
ISSUED_LENGTH = 21


def is_well_formed(code: str) -> bool:
    """Return True if ``code`` is an alphanumeric string of length 10 to 30."""
    return bool(code) and _WELL_FORMED.fullmatch(code) is not None


class ReferenceCode(RootValueObject[str]):
    """Administrative Reference Code (ARC) identifying a consignment."""

    @field_validator("root")
    @classmethod
    def _well_formed(cls, v: str) -> str:
        if not is_well_formed(v):
            raise ValueError(f"Malformed ARC: {v!r}")
        return v


class ReferenceComponents(ValueObject):
    year: str
    country_code: str
    random_number: str
    check_digit: str
