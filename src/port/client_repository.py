from typing import Protocol

from domain.model.client import Client


class ClientRepository(Protocol):
    """Protocol defining the interface for client data access."""

    def get_by_id(self, client_id: int) -> Client | None:
        """Find a client by ID. Return Client or None if not found.

        Storage failures raise rather than returning None.
        """
        ...
