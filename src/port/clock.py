"""Clock port — source of the current time."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Port for reading the current date and time."""

    def now(self) -> datetime: ...
