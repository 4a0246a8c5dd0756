"""Claim history queries."""

from dataclasses import dataclass

from live_leaderboard.domain.errors import InvalidRequestError
from live_leaderboard.domain.models import ClaimRecord
from live_leaderboard.services.claims import ClaimRepository
from live_leaderboard.services.users import parse_user_id

DEFAULT_HISTORY_LIMIT = 100


@dataclass
class HistoryService:
    """Service for reading a user's claim log."""

    repository: ClaimRepository
    max_limit: int = DEFAULT_HISTORY_LIMIT

    def get_history(
        self, user_id: object, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[ClaimRecord]:
        """Return the user's claims, newest first, capped at ``limit``."""
        resolved_id = parse_user_id(user_id)
        if limit < 1:
            raise InvalidRequestError("limit must be at least 1")
        return self.repository.list_claims(resolved_id, min(limit, self.max_limit))
