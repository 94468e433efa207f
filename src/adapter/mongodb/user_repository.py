"""MongoDB implementation of UserRepository."""

from datetime import datetime, time, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import PersistenceError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')
            create_index_safe(self.collection, [('client_id', 1)], 'idx_users_client_id')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_document(self, user: User) -> dict:
        # BSON has no date type; store midnight UTC
        return {
            'first_name': user.first_name,
            'last_name': user.last_name,
            'email': user.email,
            'date_of_birth': datetime.combine(user.date_of_birth, time.min, tzinfo=timezone.utc),
            'client_id': user.client.id,
            'has_credit_limit': user.has_credit_limit,
            'credit_limit': user.credit_limit if user.has_credit_limit else None,
            'created_at': datetime.now(timezone.utc),
        }

    def add(self, user: User) -> None:
        """Insert a registered user. Raises PersistenceError on driver failure."""
        try:
            result = self.collection.insert_one(self._to_document(user))
            logger.info("User stored", extra={"userId": str(result.inserted_id), "clientId": user.client.id})
        except PyMongoError as e:
            logger.error("Failed to store user", extra={"clientId": user.client.id, "error": str(e)})
            raise PersistenceError("Failed to store user") from e
