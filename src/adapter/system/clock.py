"""Wall-clock implementation of Clock."""

from datetime import datetime


class SystemClock:
    def now(self) -> datetime:
        # Local time, so the age check uses the host's calendar day
        return datetime.now().astimezone()
