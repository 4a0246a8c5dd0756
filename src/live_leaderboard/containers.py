"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from live_leaderboard.adapters.supabase_claim_repository import (
    SupabaseClaimRepository,
)
from live_leaderboard.adapters.supabase_user_repository import SupabaseUserRepository
from live_leaderboard.adapters.websocket_hub import WebSocketHub
from live_leaderboard.config import Settings
from live_leaderboard.services.claims import ClaimService
from live_leaderboard.services.history import HistoryService
from live_leaderboard.services.leaderboard import LeaderboardService
from live_leaderboard.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    hub: WebSocketHub
    user_service: UserService
    leaderboard_service: LeaderboardService
    claim_service: ClaimService
    history_service: HistoryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    claim_repository = SupabaseClaimRepository(supabase_client)
    hub = WebSocketHub(max_pending=resolved_settings.subscriber_queue_size)
    leaderboard_service = LeaderboardService(user_repository)
    claim_service = ClaimService(
        user_repository=user_repository,
        claim_repository=claim_repository,
        leaderboard_service=leaderboard_service,
        channel=hub,
    )

    async def close_resources() -> None:
        await hub.close()

    return AppContainer(
        settings=resolved_settings,
        hub=hub,
        user_service=UserService(user_repository, hub),
        leaderboard_service=leaderboard_service,
        claim_service=claim_service,
        history_service=HistoryService(
            claim_repository, max_limit=resolved_settings.history_limit
        ),
        close_resources=close_resources,
    )
