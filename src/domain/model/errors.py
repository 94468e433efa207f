"""Domain-level exceptions.

Services raise these errors to express business rule violations.
RegistrationService.register() collapses every RegistrationRejectedError
into a False return value; register_user() lets them through.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class PersistenceError(DomainError):
    """Storage backend failed to persist an entity."""


# ── Registration rejections ──────────────────────────────


class RegistrationRejectedError(DomainError):
    """A registration rule failed. `reason` is a stable machine-readable code."""

    reason = 'rejected'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.reason)


class EmptyRequiredFieldError(RegistrationRejectedError, ValidationError):
    """First or last name is missing."""

    reason = 'empty_required_field'

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required")


class InvalidEmailShapeError(RegistrationRejectedError, ValidationError):
    """Email contains neither '@' nor '.'."""

    reason = 'invalid_email_shape'


class UnderageApplicantError(RegistrationRejectedError, ValidationError):
    """Applicant is younger than the minimum age."""

    reason = 'underage_applicant'

    def __init__(self, age: int, minimum_age: int):
        self.age = age
        self.minimum_age = minimum_age
        super().__init__(f"Applicant is {age}, minimum age is {minimum_age}")


class ClientNotFoundError(RegistrationRejectedError, NotFoundError):
    """No client exists for the given identifier."""

    reason = 'client_not_found'

    def __init__(self, client_id: int):
        self.client_id = client_id
        super().__init__(f"Client {client_id} not found")


class CreditLimitTooLowError(RegistrationRejectedError):
    """Computed credit limit is under the minimum."""

    reason = 'credit_limit_too_low'

    def __init__(self, credit_limit: int, minimum: int):
        self.credit_limit = credit_limit
        self.minimum = minimum
        super().__init__(f"Credit limit {credit_limit} is below {minimum}")
