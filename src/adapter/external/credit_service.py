"""Credit service HTTP adapter.

Implements CreditLimitProvider by querying the user credit service.

Request:  GET {CREDIT_SERVICE_URL}?firstName=..&lastName=..&dateOfBirth=YYYY-MM-DD
Response: {"creditLimit": 600}
"""

import logging
import os
from datetime import date

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from port.credit_service import (
    CreditServiceTimeoutError,
    CreditServiceUnavailableError,
)

logger = logging.getLogger(__name__)

CREDIT_SERVICE_URL = os.getenv('CREDIT_SERVICE_URL', 'http://localhost:8080/api/credit-limit')
API_TIMEOUT_SECONDS = float(os.getenv('CREDIT_SERVICE_TIMEOUT_SECONDS', '5.0'))


class HttpCreditServiceAdapter:
    """Adapter that fetches credit limits from the user credit service."""

    def __init__(self, base_url: str = CREDIT_SERVICE_URL, timeout: float = API_TIMEOUT_SECONDS):
        self.base_url = base_url
        self.timeout = timeout

    def get_credit_limit(
        self, first_name: str, last_name: str, date_of_birth: date,
    ) -> int:
        """Return the applicant's credit limit.

        Raises:
            CreditServiceTimeoutError: request timed out after retries
            CreditServiceUnavailableError: transport failure, error status or malformed payload
        """
        params = {
            "firstName": first_name,
            "lastName": last_name,
            "dateOfBirth": date_of_birth.isoformat(),
        }

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = _fetch_with_retry(client, self.base_url, params)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            logger.error("Credit service timed out", extra={"url": self.base_url})
            raise CreditServiceTimeoutError("Credit service timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error(
                "Credit service returned error status",
                extra={"url": self.base_url, "status": e.response.status_code},
            )
            raise CreditServiceUnavailableError(
                f"Credit service returned {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "Credit service request failed",
                extra={"url": self.base_url, "error": str(e)},
                exc_info=True,
            )
            raise CreditServiceUnavailableError("Credit service request failed") from e

        return _parse_credit_limit(data)


def _parse_credit_limit(data) -> int:
    """Extract the integer credit limit from a response payload."""
    if not isinstance(data, dict):
        raise CreditServiceUnavailableError(
            f"Unexpected response type: {type(data).__name__}"
        )
    value = data.get("creditLimit")
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CreditServiceUnavailableError("Response has no numeric creditLimit")
    return int(value)


# ── HTTP helpers ─────────────────────────────────────────────


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
def _fetch_with_retry(client: httpx.Client, url: str, params: dict) -> httpx.Response:
    """Fetch URL with automatic retry on transient failures."""
    return client.get(url, params=params)
