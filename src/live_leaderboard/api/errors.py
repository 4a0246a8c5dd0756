"""Translate domain errors into what a caller is allowed to see."""

import logging

from live_leaderboard.domain.errors import InternalFailureError, LeaderboardError
from live_leaderboard.domain.events import error_payload

logger = logging.getLogger(__name__)


def caller_error(error: LeaderboardError, context: str) -> dict[str, object]:
    """Return the error payload for the caller, logging internal failures."""
    if isinstance(error, InternalFailureError):
        logger.error("Internal failure during %s: %s", context, error.message)
        return error_payload(InternalFailureError())
    return error_payload(error)


def unexpected_error(context: str) -> dict[str, object]:
    """Log the active exception and return a generic payload.

    Must be called from inside an ``except`` block.
    """
    logger.exception("Unexpected error during %s", context)
    return error_payload(InternalFailureError())
