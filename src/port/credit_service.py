"""Credit service port — outbound interface for credit limit checks."""

from datetime import date
from typing import Protocol


class CreditServiceError(Exception):
    """Base exception for credit service port errors."""


class CreditServiceTimeoutError(CreditServiceError):
    """Credit service request timed out."""


class CreditServiceUnavailableError(CreditServiceError):
    """Credit service could not be reached or returned an unusable response."""


class CreditLimitProvider(Protocol):
    """Port for looking up an applicant's credit limit."""

    def get_credit_limit(
        self, first_name: str, last_name: str, date_of_birth: date,
    ) -> int: ...
