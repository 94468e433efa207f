from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for persisting registered users."""

    def add(self, user: User) -> None:
        """Persist a fully validated user. Raises PersistenceError on failure."""
        ...
