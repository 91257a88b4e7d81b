"""Centralized error transformation for API routes.

Maps EMCS errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from emcs.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    DomainError,
    EMCSError,
    InfrastructureError,
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    InvalidStateError: 409,
    ConflictError: 409,
    AuthorizationError: 403,
}


def _domain_status(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in DOMAIN_ERROR_STATUS_MAP:
            return DOMAIN_ERROR_STATUS_MAP[cls]
    return 400


def map_emcs_error(error: EMCSError) -> HTTPException:
    """Map an EMCS error to an HTTPException.

    Args:
        error: The EMCS error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Ledger/storage unavailable or retries exhausted → 503 Service Unavailable
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        if isinstance(error, InvalidTransitionError):
            detail["current_status"] = error.current_status
        return HTTPException(status_code=_domain_status(error), detail=detail)

    # Fallback for unknown EMCSError subclasses
    return HTTPException(status_code=500, detail=detail)
