"""Error taxonomy shared by services and transports."""


class LeaderboardError(Exception):
    """Base error reported back to the caller that triggered it."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(LeaderboardError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(LeaderboardError):
    """Referenced user does not exist."""

    status_code = 404
    default_message = "Not found"


class ConflictError(LeaderboardError):
    """Unique constraint violated, e.g. a duplicate user name."""

    status_code = 409
    default_message = "Conflict"


class InternalFailureError(LeaderboardError):
    """Store unavailable or an unexpected fault.

    The message is shown to callers, so it must stay generic. Details go to
    the operator log instead.
    """

    status_code = 500
    default_message = "Internal error"
