"""Registration service — validates and registers a new user.

Flow: required fields → email shape → age gate → client lookup
→ classification-driven credit check → credit limit gate → persist

Pure business logic over four injected ports. Rule failures raise
RegistrationRejectedError subclasses inside register_user(); register()
collapses them to a boolean. Collaborator faults propagate unchanged.
"""

import logging
from datetime import date, datetime

from domain.model.client import Client
from domain.model.errors import (
    ClientNotFoundError,
    CreditLimitTooLowError,
    EmptyRequiredFieldError,
    InvalidEmailShapeError,
    RegistrationRejectedError,
    UnderageApplicantError,
)
from domain.model.user import RegistrationInput, User, as_date, calculate_age
from port.client_repository import ClientRepository
from port.clock import Clock
from port.credit_service import CreditLimitProvider
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MINIMUM_AGE = 21
MINIMUM_CREDIT_LIMIT = 500


class RegistrationService:
    """Registration Validator. All collaborators are required."""

    def __init__(
        self,
        clock: Clock,
        client_repo: ClientRepository,
        credit_service: CreditLimitProvider,
        user_repo: UserRepository,
    ):
        self.clock = clock
        self.client_repo = client_repo
        self.credit_service = credit_service
        self.user_repo = user_repo

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        date_of_birth: date | datetime,
        client_id: int,
    ) -> bool:
        """Register a user. True if persisted, False if any rule rejected it."""
        inputs = RegistrationInput(
            first_name=first_name,
            last_name=last_name,
            email=email,
            date_of_birth=as_date(date_of_birth),
            client_id=client_id,
        )
        try:
            self.register_user(inputs)
        except RegistrationRejectedError:
            return False
        return True

    def register_user(self, inputs: RegistrationInput) -> User:
        """Run every rule in order and persist the user.

        Returns the persisted User.

        Raises:
            EmptyRequiredFieldError: first or last name empty
            InvalidEmailShapeError: email has neither '@' nor '.'
            UnderageApplicantError: younger than MINIMUM_AGE
            ClientNotFoundError: client_id resolves to nothing
            CreditLimitTooLowError: credit limit under MINIMUM_CREDIT_LIMIT
        """
        try:
            _validate_fields(inputs)
            _check_age(inputs.date_of_birth, self.clock.now())

            client = self.client_repo.get_by_id(inputs.client_id)
            if client is None:
                raise ClientNotFoundError(inputs.client_id)

            user = self._build_user(inputs, client)
            _check_credit_limit(user)
        except RegistrationRejectedError as e:
            logger.info("Registration rejected", extra={
                "clientId": inputs.client_id,
                "reason": e.reason,
            })
            raise

        self.user_repo.add(user)
        logger.info("User registered", extra={
            "clientId": client.id,
            "classification": client.classification.name,
            "hasCreditLimit": user.has_credit_limit,
        })
        return user

    def _build_user(self, inputs: RegistrationInput, client: Client) -> User:
        """Construct the User, running the credit check the client's tier calls for."""
        classification = client.classification
        has_credit_limit = False
        credit_limit = 0

        if classification.requires_credit_check:
            has_credit_limit = True
            credit_limit = self.credit_service.get_credit_limit(
                inputs.first_name, inputs.last_name, inputs.date_of_birth,
            ) * classification.credit_multiplier

        return User(
            first_name=inputs.first_name,
            last_name=inputs.last_name,
            email=inputs.email,
            date_of_birth=inputs.date_of_birth,
            client=client,
            has_credit_limit=has_credit_limit,
            credit_limit=credit_limit,
        )


def _validate_fields(inputs: RegistrationInput) -> None:
    if not inputs.first_name:
        raise EmptyRequiredFieldError("first_name")
    if not inputs.last_name:
        raise EmptyRequiredFieldError("last_name")
    # Rejects only when BOTH symbols are missing.
    email = inputs.email or ''
    if '@' not in email and '.' not in email:
        raise InvalidEmailShapeError()


def _check_age(date_of_birth: date, now: datetime) -> None:
    age = calculate_age(date_of_birth, now)
    if age < MINIMUM_AGE:
        raise UnderageApplicantError(age, MINIMUM_AGE)


def _check_credit_limit(user: User) -> None:
    if user.has_credit_limit and user.credit_limit < MINIMUM_CREDIT_LIMIT:
        raise CreditLimitTooLowError(user.credit_limit, MINIMUM_CREDIT_LIMIT)
