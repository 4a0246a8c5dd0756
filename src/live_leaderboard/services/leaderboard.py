"""Leaderboard read service."""

from dataclasses import dataclass

from live_leaderboard.domain.models import RankedUser
from live_leaderboard.domain.ranking import rank_users
from live_leaderboard.services.users import UserRepository


@dataclass
class LeaderboardService:
    """Computes the ranking from the store's current state."""

    repository: UserRepository

    def get_ranking(self) -> list[RankedUser]:
        """Return a freshly computed ranking."""
        return rank_users(self.repository.list_users_by_rank())
