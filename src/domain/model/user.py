# domain/model/user.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from domain.model.client import Client


@dataclass(frozen=True)
class RegistrationInput:
    """Caller-supplied fields for a registration attempt."""
    first_name: str
    last_name: str
    email: str
    date_of_birth: date
    client_id: int


@dataclass(frozen=True)
class User:
    """Domain model representing a validated user, ready for persistence.

    credit_limit is only meaningful when has_credit_limit is True.
    """
    first_name: str
    last_name: str
    email: str
    date_of_birth: date
    client: Client
    has_credit_limit: bool = False
    credit_limit: int = 0


def as_date(value: date | datetime) -> date:
    """Narrow a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def calculate_age(date_of_birth: date | datetime, today: date | datetime) -> int:
    """Full years elapsed, minus one if this year's birthday has not happened yet.

    Examples:
        calculate_age(date(2000, 2, 16), date(2021, 2, 16))  → 21
        calculate_age(date(2000, 2, 17), date(2021, 2, 16))  → 20
    """
    born = as_date(date_of_birth)
    current = as_date(today)
    age = current.year - born.year
    if (current.month, current.day) < (born.month, born.day):
        age -= 1
    return age
