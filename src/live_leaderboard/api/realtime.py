"""Live channel handlers."""

from live_leaderboard.adapters.websocket_hub import Ack, Subscriber, WebSocketHub
from live_leaderboard.api.errors import caller_error, unexpected_error
from live_leaderboard.containers import AppContainer
from live_leaderboard.domain.errors import LeaderboardError
from live_leaderboard.domain.events import (
    CLAIM_ERROR,
    CLAIM_SUBMIT,
    LEADERBOARD_UPDATED,
    claim_result_payload,
    ranking_payload,
)


def register_realtime_handlers(container: AppContainer) -> None:
    """Wire the hub's connect hook and inbound events to the services."""
    hub = container.hub

    def push_ranking(subscriber: Subscriber) -> None:
        ranking = container.leaderboard_service.get_ranking()
        hub.send(subscriber, LEADERBOARD_UPDATED, ranking_payload(ranking))

    def handle_claim(
        subscriber: Subscriber, data: dict[str, object], ack: Ack | None
    ) -> None:
        try:
            result = container.claim_service.submit_claim(data.get("userId"))
        except LeaderboardError as exc:
            _reply_error(hub, subscriber, ack, caller_error(exc, "claim"))
            return
        except Exception:
            _reply_error(hub, subscriber, ack, unexpected_error("claim"))
            return
        if ack is not None:
            ack(claim_result_payload(result))

    hub.on_connect(push_ranking)
    hub.receive(CLAIM_SUBMIT, handle_claim)


def _reply_error(
    hub: WebSocketHub,
    subscriber: Subscriber,
    ack: Ack | None,
    payload: dict[str, object],
) -> None:
    if ack is not None:
        ack(payload)
        return
    hub.send(subscriber, CLAIM_ERROR, payload)
