"""In-memory implementation of CreditLimitProvider for testing."""

from datetime import date


class FakeCreditService:
    """Fake credit service that returns a preconfigured limit or raises a preconfigured error."""

    def __init__(self, credit_limit: int = 0, error: Exception | None = None):
        self.credit_limit = credit_limit
        self.error = error
        self.calls: list[dict] = []

    def get_credit_limit(
        self, first_name: str, last_name: str, date_of_birth: date,
    ) -> int:
        self.calls.append({
            "first_name": first_name,
            "last_name": last_name,
            "date_of_birth": date_of_birth,
        })
        if self.error is not None:
            raise self.error
        return self.credit_limit
