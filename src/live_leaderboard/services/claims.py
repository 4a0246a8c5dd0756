"""Claim processing."""

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from live_leaderboard.adapters.websocket_hub import LiveChannel
from live_leaderboard.domain.errors import NotFoundError
from live_leaderboard.domain.events import (
    CLAIM_CREATED,
    LEADERBOARD_UPDATED,
    claim_payload,
    ranking_payload,
)
from live_leaderboard.domain.models import ClaimRecord, ClaimResult, UserRecord
from live_leaderboard.services.leaderboard import LeaderboardService
from live_leaderboard.services.users import UserRepository, parse_user_id

logger = logging.getLogger(__name__)

MIN_CLAIM_POINTS = 1
MAX_CLAIM_POINTS = 10


class ClaimRepository(Protocol):
    """Persistence interface for the claim log."""

    def record_claim(
        self, user_id: UUID, points: int
    ) -> tuple[UserRecord, ClaimRecord] | None:
        """Add points to a user and append the claim record in one transaction.

        Returns the updated user and the new record, or None when the user
        does not exist. Either both writes land or neither does.
        """

    def list_claims(self, user_id: UUID, limit: int) -> list[ClaimRecord]:
        """Return a user's claims, newest first."""


class PointsSource(Protocol):
    """Source of points awarded per claim."""

    def draw(self) -> int:
        """Return a value in [MIN_CLAIM_POINTS, MAX_CLAIM_POINTS]."""


@dataclass
class RandomPoints(PointsSource):
    """Uniformly random points."""

    rng: random.Random = field(default_factory=random.Random)

    def draw(self) -> int:
        return self.rng.randint(MIN_CLAIM_POINTS, MAX_CLAIM_POINTS)


@dataclass
class ClaimService:
    """The write path: award points, log the claim, broadcast the result."""

    user_repository: UserRepository
    claim_repository: ClaimRepository
    leaderboard_service: LeaderboardService
    channel: LiveChannel
    points_source: PointsSource = field(default_factory=RandomPoints)

    def submit_claim(self, user_id: object) -> ClaimResult:
        """Award a random number of points to a user.

        Raises InvalidRequestError for a missing or malformed id and
        NotFoundError for an unknown user. Nothing is written or broadcast
        in either case.
        """
        resolved_id = parse_user_id(user_id)
        if self.user_repository.get_user(resolved_id) is None:
            raise NotFoundError("User not found")

        points = self.points_source.draw()
        if not MIN_CLAIM_POINTS <= points <= MAX_CLAIM_POINTS:
            raise ValueError(f"Points source returned out-of-range value {points}")

        recorded = self.claim_repository.record_claim(resolved_id, points)
        if recorded is None:
            raise NotFoundError("User not found")
        user, record = recorded
        ranking = self.leaderboard_service.get_ranking()
        logger.info(
            "User %s claimed %s points (total %s)", user.id, points, user.total_points
        )

        self.channel.broadcast(LEADERBOARD_UPDATED, ranking_payload(ranking))
        self.channel.broadcast(CLAIM_CREATED, claim_payload(record))
        return ClaimResult(
            user=user, points_earned=points, record=record, ranking=ranking
        )
