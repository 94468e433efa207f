"""Composition root — assembles production collaborators for RegistrationService."""

import logging

from dotenv import load_dotenv

# Must be called before importing modules that read env vars (adapters)
load_dotenv()

from adapter.external.credit_service import HttpCreditServiceAdapter
from adapter.mongodb.client_repository import MongoClientRepository
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.system.clock import SystemClock
from domain.model.errors import DomainError
from port.client_repository import ClientRepository
from port.clock import Clock
from port.credit_service import CreditLimitProvider
from port.user_repository import UserRepository
from services.registration_service import RegistrationService
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)


def _get_db():
    """Get MongoDB database, raising DomainError if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise DomainError("Database unavailable")
    return client[DATABASE_NAME]


def startup() -> None:
    """Configure logging and make sure collections are indexed. Call once per process."""
    setup_structured_logging()
    client = get_mongodb_client()
    if client is None:
        logger.warning("MongoDB unavailable at startup; skipping index creation")
        return
    if not ensure_all_indexes(client[DATABASE_NAME]):
        logger.warning("Some indexes could not be created")


def get_clock() -> Clock:
    return SystemClock()


def get_client_repo() -> ClientRepository:
    return MongoClientRepository(_get_db())


def get_credit_service() -> CreditLimitProvider:
    return HttpCreditServiceAdapter()


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_registration_service() -> RegistrationService:
    return RegistrationService(
        clock=get_clock(),
        client_repo=get_client_repo(),
        credit_service=get_credit_service(),
        user_repo=get_user_repo(),
    )
