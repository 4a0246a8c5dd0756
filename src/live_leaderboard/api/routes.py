"""Leaderboard HTTP endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from live_leaderboard.api.schemas import ClaimRequest, CreateUserRequest
from live_leaderboard.domain.events import (
    claim_payload,
    claim_result_payload,
    ranking_payload,
    user_payload,
)
from live_leaderboard.services.history import DEFAULT_HISTORY_LIMIT

if TYPE_CHECKING:
    from live_leaderboard.containers import AppContainer

router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.get("/users")
def list_users(request: Request) -> list[dict[str, object]]:
    """Return all users in creation order."""
    container: AppContainer = request.app.state.container
    return [user_payload(user) for user in container.user_service.list_users()]


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(body: CreateUserRequest, request: Request) -> dict[str, object]:
    """Create a user with a unique name."""
    container: AppContainer = request.app.state.container
    return user_payload(container.user_service.create_user(body.name))


@router.get("/users/{user_id}/history")
def user_history(
    user_id: str, request: Request, limit: int = DEFAULT_HISTORY_LIMIT
) -> list[dict[str, object]]:
    """Return a user's claims, newest first."""
    container: AppContainer = request.app.state.container
    records = container.history_service.get_history(user_id, limit=limit)
    return [claim_payload(record) for record in records]


@router.post("/claim")
def claim(body: ClaimRequest, request: Request) -> dict[str, object]:
    """Award random points to a user and broadcast the new standings."""
    container: AppContainer = request.app.state.container
    result = container.claim_service.submit_claim(body.user_id)
    return claim_result_payload(result)


@router.get("/leaderboard")
def leaderboard(request: Request) -> list[dict[str, object]]:
    """Return the current ranking."""
    container: AppContainer = request.app.state.container
    return ranking_payload(container.leaderboard_service.get_ranking())
