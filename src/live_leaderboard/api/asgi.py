"""ASGI entrypoint for the leaderboard API."""

from live_leaderboard.api.app import create_app
from live_leaderboard.containers import build_container

app = create_app(build_container())
