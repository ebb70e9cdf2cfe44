"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from kandidato.agents.base import Completer
from kandidato.agents.comparison.agent import ComparisonAgent
from kandidato.agents.profile.agent import ProfileAgent
from kandidato.config import load_settings
from kandidato.errors import KandidatoError, UpstreamError
from kandidato.roster import load_roster
from kandidato.schemas.config import Settings
from kandidato.shared.completion_client import CompletionClient, CompletionOptions, DryRunClient
from kandidato.web import api, pages

logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"


def build_client(settings: Settings) -> CompletionClient | DryRunClient:
    """Construct the completion client described by ``settings``."""
    if settings.dry_run:
        logger.info("DRY-RUN mode — no completion API calls will be made")
        return DryRunClient()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; completion calls will fail authentication")
    return CompletionClient(settings.openai_api_key, max_attempts=settings.max_attempts)


def create_app(settings: Settings | None = None, client: Completer | None = None) -> FastAPI:
    """Build the app with its client, agents and roster attached to ``app.state``.

    When ``client`` is given the caller owns it; otherwise one is built
    from ``settings`` and closed on shutdown.
    """
    settings = settings or load_settings()
    owns_client = client is None
    if client is None:
        client = build_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_client:
            await client.aclose()

    app = FastAPI(title="Kandidato360", lifespan=lifespan)

    options = CompletionOptions(model=settings.model)
    app.state.settings = settings
    app.state.client = client
    app.state.profile_agent = ProfileAgent(client, options)
    app.state.comparison_agent = ComparisonAgent(client, options)
    app.state.roster = load_roster(settings.roster_path)
    logger.info("Loaded %d candidates from %s", len(app.state.roster), settings.roster_path)

    @app.exception_handler(KandidatoError)
    async def kandidato_error_handler(request: Request, exc: KandidatoError) -> JSONResponse:
        if isinstance(exc, UpstreamError):
            logger.error("%s %s failed upstream: %s", request.method, request.url.path, exc)
        else:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse({"error": exc.public_message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.errors())
        return JSONResponse({"error": "Invalid request body."}, status_code=400)

    app.include_router(api.router)
    app.include_router(pages.router)
    app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")
    return app
