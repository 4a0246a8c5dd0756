"""WebSocket live channel adapter."""

import asyncio
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import uuid4

from fastapi import WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from live_leaderboard.domain.errors import InvalidRequestError
from live_leaderboard.domain.events import ACK, ERROR, error_payload

logger = logging.getLogger(__name__)

Ack = Callable[[object], None]


class LiveChannel(Protocol):
    """Interface for pushing events to every connected client."""

    def broadcast(self, event: str, payload: object) -> None:
        """Send an event to all subscribers without waiting on any of them."""


class InboundFrame(BaseModel):
    """A message sent by a client over the socket."""

    event: str
    data: dict[str, Any] = {}
    ack: str | int | None = None


@dataclass(eq=False)
class Subscriber:
    """A connected client and its outbound queue."""

    websocket: WebSocket
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue
    id: str = field(default_factory=lambda: uuid4().hex)
    sender: asyncio.Task | None = None
    closer: asyncio.Task | None = None
    closed: bool = False


Handler = Callable[[Subscriber, dict[str, object], Ack | None], None]
ConnectCallback = Callable[[Subscriber], None]


@dataclass
class WebSocketHub(LiveChannel):
    """Fan-out hub for WebSocket subscribers.

    Every subscriber owns a bounded queue drained by its own sender task, so
    ``broadcast`` only enqueues and may be called from any thread. A
    subscriber that falls ``max_pending`` messages behind is disconnected.
    Connect callbacks and inbound handlers are blocking calls and run in the
    threadpool, never on the event loop.
    """

    max_pending: int = 100
    _subscribers: set[Subscriber] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock)
    _connect_callbacks: list[ConnectCallback] = field(default_factory=list)
    _handlers: dict[str, Handler] = field(default_factory=dict)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def on_connect(self, callback: ConnectCallback) -> None:
        """Register a callback run for each new subscriber."""
        self._connect_callbacks.append(callback)

    def receive(self, event: str, handler: Handler) -> None:
        """Register the handler for an inbound event."""
        self._handlers[event] = handler

    def broadcast(self, event: str, payload: object) -> None:
        """Queue an event for every connected subscriber."""
        message = {"event": event, "data": payload}
        with self._lock:
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            self._deliver(subscriber, message)

    def send(self, subscriber: Subscriber, event: str, payload: object) -> None:
        """Queue an event for a single subscriber."""
        self._deliver(subscriber, {"event": event, "data": payload})

    async def serve(self, websocket: WebSocket) -> None:
        """Run a subscriber connection until the client goes away."""
        await websocket.accept()
        subscriber = Subscriber(
            websocket=websocket,
            loop=asyncio.get_running_loop(),
            queue=asyncio.Queue(maxsize=self.max_pending),
        )
        with self._lock:
            self._subscribers.add(subscriber)
        subscriber.sender = asyncio.create_task(self._pump(subscriber))
        logger.info("Subscriber %s connected", subscriber.id)
        try:
            for callback in list(self._connect_callbacks):
                try:
                    await run_in_threadpool(callback, subscriber)
                except Exception:
                    logger.exception("Connect callback failed for %s", subscriber.id)
            while not subscriber.closed:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(
                        message.get("code", status.WS_1000_NORMAL_CLOSURE)
                    )
                await self._dispatch(subscriber, message.get("text"))
        except WebSocketDisconnect:
            logger.info("Subscriber %s disconnected", subscriber.id)
        finally:
            self._discard(subscriber)
            if subscriber.sender is not None:
                subscriber.sender.cancel()

    async def close(self) -> None:
        """Disconnect every subscriber."""
        with self._lock:
            subscribers = list(self._subscribers)
            self._subscribers.clear()
        for subscriber in subscribers:
            subscriber.closed = True
            if subscriber.sender is not None:
                subscriber.sender.cancel()
            await _close_socket(subscriber, status.WS_1001_GOING_AWAY)

    async def _dispatch(self, subscriber: Subscriber, raw: str | None) -> None:
        frame = _parse_frame(raw)
        if frame is None:
            self.send(
                subscriber,
                ERROR,
                error_payload(InvalidRequestError("Malformed message")),
            )
            return

        handler = self._handlers.get(frame.event)
        if handler is None:
            self.send(
                subscriber,
                ERROR,
                error_payload(InvalidRequestError(f"Unknown event: {frame.event}")),
            )
            return

        ack: Ack | None = None
        if frame.ack is not None:
            ack_id = frame.ack

            def reply(payload: object) -> None:
                self._deliver(
                    subscriber, {"event": ACK, "ack": ack_id, "data": payload}
                )

            ack = reply

        await run_in_threadpool(handler, subscriber, frame.data, ack)

    def _deliver(self, subscriber: Subscriber, message: dict[str, object]) -> None:
        try:
            subscriber.loop.call_soon_threadsafe(self._enqueue, subscriber, message)
        except RuntimeError:
            logger.info("Dropping subscriber %s with a closed loop", subscriber.id)
            self._discard(subscriber)

    def _enqueue(self, subscriber: Subscriber, message: dict[str, object]) -> None:
        if subscriber.closed:
            return
        try:
            subscriber.queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Disconnecting slow subscriber %s", subscriber.id)
            subscriber.closed = True
            self._discard(subscriber)
            if subscriber.sender is not None:
                subscriber.sender.cancel()
            subscriber.closer = subscriber.loop.create_task(
                _close_socket(subscriber, status.WS_1013_TRY_AGAIN_LATER)
            )

    async def _pump(self, subscriber: Subscriber) -> None:
        try:
            while True:
                message = await subscriber.queue.get()
                await subscriber.websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError):
            logger.info("Stopped sending to subscriber %s", subscriber.id)
            self._discard(subscriber)

    def _discard(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers.discard(subscriber)


def _parse_frame(raw: str | None) -> InboundFrame | None:
    # Binary frames carry no text and are rejected like malformed JSON.
    if raw is None:
        return None
    try:
        return InboundFrame.model_validate_json(raw)
    except ValidationError:
        return None


async def _close_socket(subscriber: Subscriber, code: int) -> None:
    try:
        await subscriber.websocket.close(code=code)
    except RuntimeError:
        logger.debug("Socket for %s already closed", subscriber.id)
