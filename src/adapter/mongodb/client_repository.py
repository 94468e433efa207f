"""MongoDB implementation of ClientRepository."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import CLIENTS_COLLECTION_NAME
from domain.model.client import Client
from domain.model.errors import PersistenceError

logger = getLogger(__name__)


class MongoClientRepository:
    def __init__(self, db: Database):
        self.collection = db[CLIENTS_COLLECTION_NAME]

    def _to_domain(self, doc: dict) -> Client:
        return Client(id=doc['_id'], name=doc.get('name') or '')

    def save(self, client: Client) -> bool:
        """Insert or replace a client. Return True if successful."""
        try:
            self.collection.replace_one(
                {'_id': client.id},
                {'_id': client.id, 'name': client.name},
                upsert=True,
            )
            return True
        except PyMongoError as e:
            logger.error("Failed to save client", extra={"clientId": client.id, "error": str(e)})
            return False

    def get_by_id(self, client_id: int) -> Client | None:
        """Find a client by ID. Return Client or None if not found.

        Raises PersistenceError on driver failure.
        """
        try:
            doc = self.collection.find_one({'_id': client_id})
        except PyMongoError as e:
            logger.error("Failed to get client by ID", extra={"clientId": client_id, "error": str(e)})
            raise PersistenceError("Failed to get client") from e
        if doc:
            return self._to_domain(doc)
        return None
