"""User module repository implementation."""

from framework.repository.base import BaseRepository
from .models import User


class UserRepository(BaseRepository[User]):
    """User repository."""

    def __init__(self, session):
        super().__init__(session, User)
