"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from live_leaderboard.domain.errors import ConflictError, InternalFailureError
from live_leaderboard.domain.models import UserRecord
from live_leaderboard.services.users import UserRepository

UNIQUE_VIOLATION = "23505"
_USER_COLUMNS = "id, name, total_points, created_at, updated_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return parse_user_row(response.data[0])
        return None

    def list_users(self) -> list[UserRecord]:
        """Return all users in creation order."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .order("created_at", desc=False)
            .execute()
        )
        return [parse_user_row(row) for row in response.data or []]

    def list_users_by_rank(self) -> list[UserRecord]:
        """Return users ordered by points desc, then by who got there first."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .order("total_points", desc=True)
            .order("updated_at", desc=False)
            .order("created_at", desc=False)
            .execute()
        )
        return [parse_user_row(row) for row in response.data or []]

    def create_user(self, name: str) -> UserRecord:
        """Insert a user row, mapping a duplicate name to ConflictError."""
        try:
            response = self.client.table("users").insert({"name": name}).execute()
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise ConflictError("User with this name already exists") from exc
            raise
        if not response.data:
            raise InternalFailureError("Failed to create user")
        return parse_user_row(response.data[0])


def parse_user_row(row: dict[str, object]) -> UserRecord:
    """Build a UserRecord from a users row."""
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        total_points=int(row.get("total_points") or 0),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
