"""Supabase repository for the claim log."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from live_leaderboard.adapters.supabase_user_repository import parse_user_row
from live_leaderboard.domain.models import ClaimRecord, UserRecord
from live_leaderboard.services.claims import ClaimRepository


@dataclass
class SupabaseClaimRepository(ClaimRepository):
    """Supabase implementation for claim history."""

    client: Client

    def record_claim(
        self, user_id: UUID, points: int
    ) -> tuple[UserRecord, ClaimRecord] | None:
        """Increment the user and append the claim through the record_claim RPC."""
        response = self.client.rpc(
            "record_claim",
            {"p_user_id": str(user_id), "p_points": points},
        ).execute()
        if not response.data:
            return None
        payload = response.data
        return parse_user_row(payload["user"]), _parse_row(payload["claim"])

    def list_claims(self, user_id: UUID, limit: int) -> list[ClaimRecord]:
        """Return a user's claims, newest first."""
        response = (
            self.client.table("claim_history")
            .select("id, user_id, points, created_at")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> ClaimRecord:
    return ClaimRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        points=int(row["points"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
