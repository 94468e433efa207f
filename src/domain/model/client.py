"""Client domain model and classification rules."""

from dataclasses import dataclass
from enum import Enum


class ClientClassification(str, Enum):
    """Credit-check tier derived from the client name."""
    VERY_IMPORTANT = 'VeryImportantClient'
    IMPORTANT = 'ImportantClient'
    STANDARD = 'standard'

    @classmethod
    def from_name(cls, name: str | None) -> 'ClientClassification':
        """Map a client name to its tier. Exact, case-sensitive match."""
        if name == cls.VERY_IMPORTANT.value:
            return cls.VERY_IMPORTANT
        if name == cls.IMPORTANT.value:
            return cls.IMPORTANT
        return cls.STANDARD

    @property
    def requires_credit_check(self) -> bool:
        return self is not ClientClassification.VERY_IMPORTANT

    @property
    def credit_multiplier(self) -> int:
        return 2 if self is ClientClassification.IMPORTANT else 1


@dataclass(frozen=True)
class Client:
    """Domain model representing a client."""
    id: int
    name: str = ''

    @property
    def classification(self) -> ClientClassification:
        return ClientClassification.from_name(self.name)
