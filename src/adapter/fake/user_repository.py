"""In-memory implementation of UserRepository for testing."""

from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.users: list[User] = []

    def add(self, user: User) -> None:
        self.users.append(user)
