"""Live channel event names and their JSON payloads."""

from live_leaderboard.domain.errors import LeaderboardError
from live_leaderboard.domain.models import (
    ClaimRecord,
    ClaimResult,
    RankedUser,
    UserRecord,
)

LEADERBOARD_UPDATED = "leaderboard:updated"
CLAIM_CREATED = "claim:created"
USERS_UPDATED = "users:updated"
CLAIM_SUBMIT = "claim:submit"
CLAIM_ERROR = "claim:error"
ACK = "ack"
ERROR = "error"


def user_payload(user: UserRecord) -> dict[str, object]:
    """Serialize a user for clients."""
    return {
        "id": str(user.id),
        "name": user.name,
        "totalPoints": user.total_points,
        "createdAt": user.created_at.isoformat(),
        "updatedAt": user.updated_at.isoformat(),
    }


def ranking_payload(ranking: list[RankedUser]) -> list[dict[str, object]]:
    """Serialize a ranking for clients."""
    return [
        {
            "id": str(entry.id),
            "name": entry.name,
            "totalPoints": entry.total_points,
            "rank": entry.rank,
        }
        for entry in ranking
    ]


def claim_payload(record: ClaimRecord) -> dict[str, object]:
    """Serialize a claim record for clients."""
    return {
        "id": str(record.id),
        "userId": str(record.user_id),
        "points": record.points,
        "createdAt": record.created_at.isoformat(),
    }


def claim_result_payload(result: ClaimResult) -> dict[str, object]:
    """Serialize the direct response to a claim."""
    return {
        "userId": str(result.user.id),
        "name": result.user.name,
        "pointsEarned": result.points_earned,
        "totalPoints": result.new_total,
        "historyId": str(result.record.id),
    }


def error_payload(error: LeaderboardError) -> dict[str, object]:
    """Serialize an error for the caller that triggered it."""
    return {"error": error.message, "status": error.status_code}
