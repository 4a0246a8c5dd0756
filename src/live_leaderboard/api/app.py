"""FastAPI application factory."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, WebSocket, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from live_leaderboard.api.errors import caller_error, unexpected_error
from live_leaderboard.api.realtime import register_realtime_handlers
from live_leaderboard.api.routes import router as api_router
from live_leaderboard.app_logging import configure_logging
from live_leaderboard.config import parse_allowed_origins
from live_leaderboard.containers import AppContainer
from live_leaderboard.domain.errors import InvalidRequestError, LeaderboardError
from live_leaderboard.domain.events import error_payload


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    register_realtime_handlers(container)
    app.include_router(api_router)

    @app.exception_handler(LeaderboardError)
    async def leaderboard_error(request: Request, exc: LeaderboardError) -> Response:
        payload = caller_error(exc, f"{request.method} {request.url.path}")
        return JSONResponse(status_code=exc.status_code, content=_http_body(payload))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        body: dict[str, object] = {"error": exc.detail}
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            body["path"] = request.url.path
        return JSONResponse(
            status_code=exc.status_code, content=body, headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> Response:
        error = InvalidRequestError("Invalid request body")
        return JSONResponse(
            status_code=error.status_code, content=_http_body(error_payload(error))
        )

    @app.middleware("http")
    async def internal_failures(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            payload = unexpected_error(f"{request.method} {request.url.path}")
            return JSONResponse(status_code=500, content=_http_body(payload))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Service banner."""
        return {"status": "ok", "message": "Leaderboard API running"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.websocket("/ws")
    async def live(websocket: WebSocket) -> None:
        """Live channel for ranking and claim updates."""
        state_container: AppContainer = websocket.app.state.container
        await state_container.hub.serve(websocket)

    return app


def _http_body(payload: dict[str, object]) -> dict[str, object]:
    return {"error": payload["error"]}
