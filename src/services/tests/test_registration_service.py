"""Unit tests for registration_service module."""

import unittest
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

from pymongo.errors import ServerSelectionTimeoutError

from services.registration_service import (
    MINIMUM_AGE,
    MINIMUM_CREDIT_LIMIT,
    RegistrationService,
)
from adapter.fake.clock import FakeClock
from adapter.fake.client_repository import FakeClientRepository
from adapter.fake.credit_service import FakeCreditService
from adapter.fake.user_repository import FakeUserRepository
from adapter.mongodb.client_repository import MongoClientRepository
from domain.model.client import Client
from domain.model.errors import (
    ClientNotFoundError,
    CreditLimitTooLowError,
    EmptyRequiredFieldError,
    InvalidEmailShapeError,
    PersistenceError,
    UnderageApplicantError,
)
from domain.model.user import RegistrationInput
from port.credit_service import CreditServiceTimeoutError


CLIENT_ID = 1
NOW = datetime(2021, 2, 16, tzinfo=timezone.utc)
DOB = date(1993, 10, 10)
EMAIL = 'nick.chapsas@gmail.com'


class RegistrationTestCase(unittest.TestCase):
    """Shared fixtures: a standard client, a clock at 2021-02-16, a passing credit service."""

    client_name = 'RandomClientName'
    credit_limit = 600

    def setUp(self):
        self.clock = FakeClock(NOW)
        self.client_repo = FakeClientRepository([Client(id=CLIENT_ID, name=self.client_name)])
        self.credit_service = FakeCreditService(credit_limit=self.credit_limit)
        self.user_repo = FakeUserRepository()
        self.service = RegistrationService(
            clock=self.clock,
            client_repo=self.client_repo,
            credit_service=self.credit_service,
            user_repo=self.user_repo,
        )

    def register(self, first_name='Nick', last_name='Chapsas', email=EMAIL,
                 date_of_birth=DOB, client_id=CLIENT_ID) -> bool:
        return self.service.register(first_name, last_name, email, date_of_birth, client_id)

    def assertNothingStored(self):
        self.assertEqual(self.user_repo.users, [])


class TestRegisterSuccess(RegistrationTestCase):
    """Test the happy path end to end."""

    def test_registers_standard_client_user(self):
        """Nick Chapsas with a standard client and a 600 limit is registered as-is."""
        result = self.register()

        self.assertTrue(result)
        self.assertEqual(len(self.user_repo.users), 1)
        user = self.user_repo.users[0]
        self.assertEqual(user.first_name, 'Nick')
        self.assertEqual(user.last_name, 'Chapsas')
        self.assertEqual(user.email, EMAIL)
        self.assertEqual(user.date_of_birth, DOB)
        self.assertEqual(user.client, Client(id=CLIENT_ID, name='RandomClientName'))
        self.assertTrue(user.has_credit_limit)
        self.assertEqual(user.credit_limit, 600)

    def test_collaborators_called_once(self):
        self.register()

        self.assertEqual(self.client_repo.lookups, [CLIENT_ID])
        self.assertEqual(self.credit_service.calls, [{
            "first_name": 'Nick',
            "last_name": 'Chapsas',
            "date_of_birth": DOB,
        }])
        self.assertEqual(self.clock.calls, 1)

    def test_accepts_datetime_date_of_birth(self):
        """A datetime birth date is narrowed to its calendar date."""
        result = self.register(date_of_birth=datetime(1993, 10, 10, 15, 30))

        self.assertTrue(result)
        self.assertEqual(self.user_repo.users[0].date_of_birth, DOB)
        self.assertEqual(self.credit_service.calls[0]["date_of_birth"], DOB)

    def test_register_user_returns_persisted_user(self):
        user = self.service.register_user(RegistrationInput(
            first_name='Nick',
            last_name='Chapsas',
            email=EMAIL,
            date_of_birth=DOB,
            client_id=CLIENT_ID,
        ))

        self.assertIs(user, self.user_repo.users[0])


class TestRequiredFields(RegistrationTestCase):
    """Test rule 1: first and last name must be non-empty."""

    def test_empty_first_name_rejected(self):
        self.assertFalse(self.register(first_name=''))
        self.assertNothingStored()

    def test_empty_last_name_rejected(self):
        self.assertFalse(self.register(last_name=''))
        self.assertNothingStored()

    def test_none_name_rejected(self):
        self.assertFalse(self.register(first_name=None))
        self.assertNothingStored()

    def test_rejection_short_circuits_collaborators(self):
        """No clock, lookup or credit call happens after the first failed rule."""
        self.register(first_name='')

        self.assertEqual(self.clock.calls, 0)
        self.assertEqual(self.client_repo.lookups, [])
        self.assertEqual(self.credit_service.calls, [])

    def test_register_user_reports_field(self):
        with self.assertRaises(EmptyRequiredFieldError) as ctx:
            self.service.register_user(RegistrationInput('Nick', '', EMAIL, DOB, CLIENT_ID))
        self.assertEqual(ctx.exception.field, 'last_name')
        self.assertEqual(ctx.exception.reason, 'empty_required_field')


class TestEmailShape(RegistrationTestCase):
    """Test rule 2: email is rejected only when it has neither '@' nor '.'."""

    def test_email_without_at_or_dot_rejected(self):
        self.assertFalse(self.register(email='invalidemail'))
        self.assertNothingStored()

    def test_email_with_dot_only_passes(self):
        """Lenient check: a dot alone is enough."""
        self.assertTrue(self.register(email='nick.chapsas'))

    def test_email_with_at_only_passes(self):
        self.assertTrue(self.register(email='nick@localhost'))

    def test_empty_email_rejected(self):
        self.assertFalse(self.register(email=''))

    def test_register_user_raises_invalid_email(self):
        with self.assertRaises(InvalidEmailShapeError):
            self.service.register_user(RegistrationInput('Nick', 'Chapsas', 'nope', DOB, CLIENT_ID))


class TestAgeGate(RegistrationTestCase):
    """Test rule 3: applicant must be at least 21 on the clock date."""

    def test_exactly_21_today_accepted(self):
        self.assertTrue(self.register(date_of_birth=date(2000, 2, 16)))

    def test_one_day_short_of_21_rejected(self):
        self.assertFalse(self.register(date_of_birth=date(2000, 2, 17)))
        self.assertNothingStored()

    def test_birthday_later_in_year_not_counted(self):
        """Born 2000-10-10, on 2021-02-16 the applicant is still 20."""
        self.assertFalse(self.register(date_of_birth=date(2000, 10, 10)))

    def test_born_2002_rejected(self):
        self.assertFalse(self.register(date_of_birth=date(2002, 1, 1)))

    def test_underage_skips_client_lookup(self):
        self.register(date_of_birth=date(2002, 1, 1))
        self.assertEqual(self.client_repo.lookups, [])

    def test_register_user_reports_age(self):
        with self.assertRaises(UnderageApplicantError) as ctx:
            self.service.register_user(
                RegistrationInput('Nick', 'Chapsas', EMAIL, date(2002, 1, 1), CLIENT_ID)
            )
        self.assertEqual(ctx.exception.age, 19)
        self.assertEqual(ctx.exception.minimum_age, MINIMUM_AGE)


class TestClientResolution(RegistrationTestCase):
    """Test rule 4: an unknown client id is rejected."""

    def test_unknown_client_rejected(self):
        self.assertFalse(self.register(client_id=99))
        self.assertNothingStored()
        self.assertEqual(self.credit_service.calls, [])

    def test_register_user_raises_client_not_found(self):
        with self.assertRaises(ClientNotFoundError) as ctx:
            self.service.register_user(RegistrationInput('Nick', 'Chapsas', EMAIL, DOB, 99))
        self.assertEqual(ctx.exception.client_id, 99)


class TestVeryImportantClient(RegistrationTestCase):
    """VeryImportantClient skips the credit check entirely."""

    client_name = 'VeryImportantClient'
    credit_limit = 0

    def test_registered_without_credit_limit(self):
        self.assertTrue(self.register())

        user = self.user_repo.users[0]
        self.assertFalse(user.has_credit_limit)
        self.assertEqual(user.credit_limit, 0)

    def test_credit_service_never_called(self):
        self.register()
        self.assertEqual(self.credit_service.calls, [])

    def test_credit_service_failure_irrelevant(self):
        self.credit_service.error = CreditServiceTimeoutError("down")
        self.assertTrue(self.register())


class TestImportantClient(RegistrationTestCase):
    """ImportantClient doubles the credit limit."""

    client_name = 'ImportantClient'

    def test_credit_limit_doubled(self):
        self.assertTrue(self.register())

        user = self.user_repo.users[0]
        self.assertTrue(user.has_credit_limit)
        self.assertEqual(user.credit_limit, 1200)

    def test_250_doubles_to_minimum(self):
        """250 * 2 == 500 is not below the minimum."""
        self.credit_service.credit_limit = 250
        self.assertTrue(self.register())
        self.assertEqual(self.user_repo.users[0].credit_limit, MINIMUM_CREDIT_LIMIT)

    def test_249_doubles_below_minimum(self):
        self.credit_service.credit_limit = 249
        self.assertFalse(self.register())
        self.assertNothingStored()

    def test_classification_is_case_sensitive(self):
        """'importantclient' is a standard client, so no doubling."""
        self.client_repo.save(Client(id=CLIENT_ID, name='importantclient'))
        self.assertTrue(self.register())
        self.assertEqual(self.user_repo.users[0].credit_limit, 600)


class TestCreditLimitGate(RegistrationTestCase):
    """Test rule 6: standard clients need a credit limit of at least 500."""

    def test_499_rejected(self):
        self.credit_service.credit_limit = 499
        self.assertFalse(self.register())
        self.assertNothingStored()

    def test_500_accepted(self):
        self.credit_service.credit_limit = 500
        self.assertTrue(self.register())
        self.assertEqual(self.user_repo.users[0].credit_limit, 500)

    def test_empty_client_name_is_standard(self):
        self.client_repo.save(Client(id=CLIENT_ID, name=''))
        self.credit_service.credit_limit = 499
        self.assertFalse(self.register())

    def test_register_user_reports_limit(self):
        self.credit_service.credit_limit = 100
        with self.assertRaises(CreditLimitTooLowError) as ctx:
            self.service.register_user(RegistrationInput('Nick', 'Chapsas', EMAIL, DOB, CLIENT_ID))
        self.assertEqual(ctx.exception.credit_limit, 100)
        self.assertEqual(ctx.exception.minimum, MINIMUM_CREDIT_LIMIT)


class TestCollaboratorFailures(RegistrationTestCase):
    """Collaborator faults are not rule rejections and propagate."""

    def test_credit_service_error_propagates(self):
        self.credit_service.error = CreditServiceTimeoutError("timed out")

        with self.assertRaises(CreditServiceTimeoutError):
            self.register()
        self.assertNothingStored()

    def test_client_lookup_outage_is_not_a_rejection(self):
        """A database failure during client lookup propagates instead of reading as client_not_found."""
        collection = MagicMock()
        collection.find_one.side_effect = ServerSelectionTimeoutError('no servers')
        db = MagicMock()
        db.__getitem__.return_value = collection
        self.service.client_repo = MongoClientRepository(db)

        with self.assertRaises(PersistenceError):
            self.register()
        with self.assertRaises(PersistenceError):
            self.service.register_user(RegistrationInput('Nick', 'Chapsas', EMAIL, DOB, CLIENT_ID))
        self.assertNothingStored()
        self.assertEqual(self.credit_service.calls, [])


class TestRegistrationLogging(RegistrationTestCase):
    """Rejections and registrations are logged with their reason codes."""

    def test_rejection_logged_with_reason(self):
        with self.assertLogs('services.registration_service', level='INFO') as logs:
            self.register(email='invalidemail')

        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].reason, 'invalid_email_shape')
        self.assertEqual(logs.records[0].clientId, CLIENT_ID)

    def test_success_logged(self):
        with self.assertLogs('services.registration_service', level='INFO') as logs:
            self.register()

        self.assertEqual(logs.records[-1].getMessage(), 'User registered')
        self.assertEqual(logs.records[-1].classification, 'STANDARD')


if __name__ == '__main__':
    unittest.main()
