"""Ranking computation."""

from collections.abc import Iterable

from live_leaderboard.domain.models import RankedUser, UserRecord


def rank_users(users: Iterable[UserRecord]) -> list[RankedUser]:
    """Order users by points and number them from 1.

    Higher totals come first. Equal totals are ordered by who reached the
    score first (earlier ``updated_at``), then by creation time, then by id,
    so every user gets a distinct rank.
    """
    ordered = sorted(users, key=_sort_key)
    return [
        RankedUser(
            id=user.id,
            name=user.name,
            total_points=user.total_points,
            rank=position,
        )
        for position, user in enumerate(ordered, start=1)
    ]


def _sort_key(user: UserRecord) -> tuple[int, float, float, str]:
    return (
        -user.total_points,
        user.updated_at.timestamp(),
        user.created_at.timestamp(),
        str(user.id),
    )
