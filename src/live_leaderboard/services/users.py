"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from live_leaderboard.adapters.websocket_hub import LiveChannel
from live_leaderboard.domain.errors import InvalidRequestError
from live_leaderboard.domain.events import USERS_UPDATED
from live_leaderboard.domain.models import UserRecord

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def list_users(self) -> list[UserRecord]:
        """Return all users in creation order."""

    def list_users_by_rank(self) -> list[UserRecord]:
        """Return all users ordered by points desc, then updated_at asc."""

    def create_user(self, name: str) -> UserRecord:
        """Create a user, raising ConflictError when the name is taken."""


def parse_user_id(raw: object) -> UUID:
    """Validate a user id coming from a caller."""
    if isinstance(raw, UUID):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidRequestError("userId is required")
    try:
        return UUID(raw.strip())
    except ValueError as exc:
        raise InvalidRequestError("userId is malformed") from exc


@dataclass
class UserService:
    """Application service for creating and listing users."""

    repository: UserRepository
    channel: LiveChannel

    def create_user(self, name: str | None) -> UserRecord:
        """Create a user and tell subscribers to refresh their user list."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidRequestError("Name is required")
        user = self.repository.create_user(cleaned)
        logger.info("Created user %s", user.id)
        self.channel.broadcast(USERS_UPDATED, None)
        return user

    def list_users(self) -> list[UserRecord]:
        """Return all users in creation order."""
        return self.repository.list_users()
