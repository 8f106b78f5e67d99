"""FastAPI application factory."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import unquote

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from feastfit.api.models import (
    CoachPayload,
    LogMealPayload,
    RefineResultsPayload,
    SearchRestaurantsPayload,
    meal_log_to_json,
    restaurant_to_json,
    snapshot_to_json,
)
from feastfit.app_logging import configure_logging
from feastfit.containers import AppContainer
from feastfit.errors import FeastFitError, ValidationError
from feastfit.services.context import (
    compact_search_snapshot,
    parse_logged_meals,
    parse_snapshot,
)

LAST_SEARCH_HEADER = "x-feastfit-last-search"
GUEST_LOGS_HEADER = "x-feastfit-guest-logs"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(FeastFitError)
    async def feastfit_error_handler(
        request: Request, exc: FeastFitError
    ) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=ValidationError.status_code,
            content={"error": ValidationError.public_message},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/search-restaurants")
    async def search_restaurants(
        payload: SearchRestaurantsPayload, request: Request
    ) -> dict[str, object]:
        """Return macro-scored restaurants for a search."""
        state_container: AppContainer = request.app.state.container
        service = state_container.recommendation_service
        search_request = payload.to_domain()
        results = await service.search(search_request, client_id=_client_id(request))
        snapshot = compact_search_snapshot(search_request, results, service.clock())
        return {
            "restaurants": [restaurant_to_json(result) for result in results],
            "snapshot": snapshot_to_json(snapshot),
        }

    @app.post("/api/refine-results")
    async def refine_results(
        payload: RefineResultsPayload, request: Request
    ) -> dict[str, str]:
        """Re-explain prior results under a refinement message."""
        state_container: AppContainer = request.app.state.container
        message = await state_container.recommendation_service.refine(
            payload.to_domain()
        )
        return {"message": message}

    @app.post("/api/coach")
    async def coach(payload: CoachPayload, request: Request) -> dict[str, str]:
        """Answer a coaching question using the caller's local context."""
        state_container: AppContainer = request.app.state.container
        snapshot = parse_snapshot(
            _decode_header_json(request, LAST_SEARCH_HEADER, logger)
        )
        logs = parse_logged_meals(
            _decode_header_json(request, GUEST_LOGS_HEADER, logger)
        )
        reply = await state_container.recommendation_service.coach(
            payload.message or "", snapshot=snapshot, logs=logs
        )
        return {"reply": reply}

    @app.post("/api/log-meal")
    async def log_meal(payload: LogMealPayload, request: Request) -> dict[str, bool]:
        """Persist a logged meal for a signed-in user."""
        state_container: AppContainer = request.app.state.container
        log_request = payload.to_domain()
        if log_request is None:
            raise ValidationError
        state_container.meal_log_service.log_meal(log_request)
        return {"ok": True}

    @app.get("/api/logs")
    async def list_logs(
        request: Request, user_id: str | None = Query(default=None, alias="userId")
    ) -> dict[str, object]:
        """Return a user's recent meal logs, newest first."""
        state_container: AppContainer = request.app.state.container
        logs = state_container.meal_log_service.list_logs(user_id or "")
        return {"logs": [meal_log_to_json(entry) for entry in logs]}

    return app


def _client_id(request: Request) -> str:
    """Identify the caller by forwarded IP, then socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def _decode_header_json(
    request: Request, header: str, logger: logging.Logger
) -> object | None:
    """Decode a URL-encoded JSON header, ignoring malformed values."""
    raw = request.headers.get(header)
    if not raw:
        return None
    try:
        return json.loads(unquote(raw))
    except (ValueError, RecursionError):
        logger.warning("Ignoring malformed %s header", header)
        return None
