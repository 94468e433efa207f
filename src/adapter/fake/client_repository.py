"""In-memory implementation of ClientRepository for testing."""

from domain.model.client import Client


class FakeClientRepository:
    def __init__(self, clients: list[Client] | None = None):
        self.store: dict[int, Client] = {c.id: c for c in clients or []}
        self.lookups: list[int] = []

    def save(self, client: Client) -> None:
        self.store[client.id] = client

    def get_by_id(self, client_id: int) -> Client | None:
        self.lookups.append(client_id)
        return self.store.get(client_id)
