"""Error hierarchy for EMCS.

Error layers:
- EMCSError: Base class for all EMCS errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: Ledger/storage failures and exhausted retries (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class EMCSError(Exception):
    """Base class for all EMCS errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(EMCSError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class InvalidTransitionError(InvalidStateError):
    """Lifecycle transition is illegal from the consignment's current status."""

    def __init__(self, message: str, current_status: str) -> None:
        super().__init__(message, code="INVALID_TRANSITION")
        self.current_status = current_status


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


class AuthorizationError(DomainError):
    """Requester is not the party allowed to perform this operation."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(EMCSError):
    """Base class for infrastructure/system errors."""


class ExhaustedRetriesError(InfrastructureError):
    """A bounded retry loop ran out of attempts.

    Only the last underlying error is kept; earlier ones are logged by the caller.
    """

    def __init__(
        self,
        message: str,
        attempts: int,
        last_error: BaseException | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code or "EXHAUSTED_RETRIES")
        self.attempts = attempts
        self.last_error = last_error


class SubmissionFailedError(ExhaustedRetriesError):
    """Ledger transaction could not be submitted within the retry budget."""

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        super().__init__(
            f"Transaction failed after {attempts} attempts: {last_error}",
            attempts=attempts,
            last_error=last_error,
            code="SUBMISSION_FAILED",
        )


class NotarizationFailedError(InfrastructureError):
    """Document could not be canonicalized, hashed or anchored.

    The underlying cause is chained via ``raise ... from``.
    """


class StorageUnavailableError(InfrastructureError):
    """Storage backend (data files) is unavailable or unreadable."""


class ExternalServiceError(InfrastructureError):
    """External service (ledger node) is unavailable or returned an error."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
