"""Domain models for the leaderboard."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    total_points: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ClaimRecord:
    """A single, immutable claim awarded to a user."""

    id: UUID
    user_id: UUID
    points: int
    created_at: datetime


@dataclass(frozen=True)
class RankedUser:
    """A user with its position on the leaderboard."""

    id: UUID
    name: str
    total_points: int
    rank: int


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a successful claim."""

    user: UserRecord
    points_earned: int
    record: ClaimRecord
    ranking: list[RankedUser]

    @property
    def new_total(self) -> int:
        return self.user.total_points
