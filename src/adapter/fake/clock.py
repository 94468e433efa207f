"""Fixed-time implementation of Clock for testing."""

from datetime import datetime, timezone


class FakeClock:
    def __init__(self, now: datetime | None = None):
        self.current = now or datetime(2021, 2, 16, tzinfo=timezone.utc)
        self.calls = 0

    def now(self) -> datetime:
        self.calls += 1
        return self.current
