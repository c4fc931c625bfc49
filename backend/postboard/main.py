"""
PostBoard Backend: FastAPI Application Factory
==============================================

What:  Composition root. Builds stores, handlers, pipeline routers and the
       Error Boundary, then exposes every pipeline route through FastAPI.
Who:   uvicorn (``postboard.main:app`` or ``python -m postboard``) and the tests
       (``create_app(Settings(...))``).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │  HTTP middleware: Request ID → Access Log → GZip → CORS
    │                                                      │
    │  add_api_route(path) ──▶ bridge endpoint             │
    │        │   RequestContext from the Starlette Request │
    │        ▼                                             │
    │  Application.dispatch(route, ctx)                    │
    │        Chain: timestamp → [auth] → handler           │
    │        Fail ──▶ ErrorBoundary.render()               │
    │                                                      │
    │  /health (plain APIRouter)                           │
    │  catch-all exception handler ──▶ ErrorBoundary       │
    └──────────────────────────────────────────────────────┘

FastAPI does the HTTP path matching; each bridge endpoint is bound to its
already-matched pipeline route, so the pipeline only runs the chain.
"""

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from postboard import __version__
from postboard.config import Settings, settings
from postboard.database import build_engine, build_session_factory, dispose_engine, init_models
from postboard.exceptions import ValidationError
from postboard.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from postboard.models import PostRow, UserRow
from postboard.pipeline import (
    Application,
    AuthGate,
    ErrorBoundary,
    RequestContext,
    RequestTimestamp,
    Respond,
    Route,
)
from postboard.pipeline.router import NOT_FOUND
from postboard.resources import POSTS, USERS
from postboard.routes import health
from postboard.routes.auth_demo import auth_demo_router
from postboard.routes.resources import resource_router
from postboard.routes.root import root_router
from postboard.schemas import MessageResponse
from postboard.services import AuthDemoHandlers, ResourceHandlers
from postboard.stores import DatabaseStore, InMemoryStore, ResourceStore
from postboard.stores.seed import demo_posts, demo_users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Settings) -> None:
    """
    Configure the root logger once, at startup.

    Format: 2026-01-15T12:00:00 [INFO] postboard.access: GET /users 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Stores and pipeline composition
# ══════════════════════════════════════════════════════════════════════════

def build_stores(
    app_settings: Settings,
) -> Tuple[Dict[str, ResourceStore], Optional[AsyncEngine]]:
    """
    Create one store per resource for the configured backend.

    Returns the stores keyed by collection name, plus the engine when the
    database backend is in use (None otherwise).
    """
    if app_settings.uses_database:
        engine = build_engine(app_settings)
        session_factory = build_session_factory(engine)
        stores: Dict[str, ResourceStore] = {
            "users": DatabaseStore(USERS, UserRow, session_factory),
            "posts": DatabaseStore(POSTS, PostRow, session_factory),
        }
        return stores, engine

    seed = app_settings.seed_demo_data
    stores = {
        "users": InMemoryStore(
            USERS,
            seed=demo_users() if seed else None,
            legacy_delete=app_settings.legacy_delete,
        ),
        "posts": InMemoryStore(
            POSTS,
            seed=demo_posts() if seed else None,
            legacy_delete=app_settings.legacy_delete,
        ),
    }
    return stores, None


def compose_pipeline(app_settings: Settings, stores: Dict[str, ResourceStore]) -> Application:
    """
    Mount every router, then register the Error Boundary last.

    Application.mount() refuses routers after use_error_boundary(), so the
    order here is enforced, not just conventional.
    """
    timestamp = RequestTimestamp()
    gate = AuthGate(token=app_settings.auth_token, header=app_settings.auth_header)
    auth_handlers = AuthDemoHandlers(
        username=app_settings.login_username,
        password=app_settings.login_password,
        token=app_settings.auth_token,
    )

    pipeline = Application()
    pipeline.mount("/users", resource_router(ResourceHandlers(USERS, stores["users"]), timestamp))
    pipeline.mount("/posts", resource_router(ResourceHandlers(POSTS, stores["posts"]), timestamp))
    pipeline.mount("/test-routes", auth_demo_router(auth_handlers, gate))
    pipeline.mount("", root_router())
    pipeline.use_error_boundary(ErrorBoundary(expose_details=app_settings.expose_error_details))
    return pipeline


# ══════════════════════════════════════════════════════════════════════════
# HTTP bridge
# ══════════════════════════════════════════════════════════════════════════

async def build_context(request: Request) -> Tuple[RequestContext, Optional[ValidationError]]:
    """
    Translate a Starlette request into a RequestContext.

    An empty body becomes None. A body that is not valid JSON is reported
    as a ValidationError for the Error Boundary instead of a context body.
    """
    ctx = RequestContext(
        method=request.method,
        path=request.url.path,
        params=dict(request.path_params),
        query=dict(request.query_params),
        headers=dict(request.headers),
        state={"request_id": getattr(request.state, "request_id", "")},
    )

    raw = await request.body()
    if raw.strip():
        try:
            ctx.body = json.loads(raw)
        except ValueError as e:
            return ctx, ValidationError(
                message=f"Malformed JSON body: {e}",
                field="body",
            )
    return ctx, None


def to_response(outcome: Respond) -> Response:
    if outcome.media_type == "application/json":
        return JSONResponse(
            status_code=outcome.status_code,
            content=outcome.content,
            headers=dict(outcome.headers),
        )
    return Response(
        content=outcome.content,
        status_code=outcome.status_code,
        headers=dict(outcome.headers),
        media_type=outcome.media_type,
    )


def make_endpoint(pipeline: Application, route: Route):
    """Bind one FastAPI endpoint to one pipeline route."""

    async def endpoint(request: Request) -> Response:
        ctx, body_error = await build_context(request)
        if body_error is not None:
            return to_response(pipeline.boundary.render(body_error, ctx))
        return to_response(await pipeline.dispatch(route, ctx))

    endpoint.__name__ = f"{route.method.lower()}_{route.template.strip('/').replace('/', '_') or 'root'}"
    return endpoint


def register_pipeline_routes(app: FastAPI, pipeline: Application) -> None:
    for route in pipeline:
        app.add_api_route(
            route.template,
            make_endpoint(pipeline, route),
            methods=[route.method],
            name=f"{route.method} {route.template}",
        )


def register_exception_handlers(app: FastAPI, boundary: ErrorBoundary) -> None:
    """
    Route anything raised outside the pipeline through the same boundary.

    Registered after every route so it sees them all. Unmatched paths and
    methods answer with the pipeline's own {message} body instead of
    FastAPI's {detail}.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return to_response(NOT_FOUND)
        return to_response(Respond(
            status_code=exc.status_code,
            content=MessageResponse(message=str(exc.detail)).model_dump(),
            headers=exc.headers or {},
        ))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        ctx = RequestContext(
            method=request.method,
            path=request.url.path,
            state={"request_id": getattr(request.state, "request_id", "")},
        )
        return to_response(boundary.render(exc, ctx))


# ══════════════════════════════════════════════════════════════════════════
# Lifespan and factory
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging, config warnings, tables. Shutdown: dispose the engine."""
    app_settings: Settings = app.state.settings
    setup_logging(app_settings)
    logger.info("PostBoard Backend starting (store=%s)", app_settings.store_backend)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        # Demo defaults are allowed; make them loud
        logger.warning("%s", str(e))

    engine: Optional[AsyncEngine] = app.state.engine
    if engine is not None and app_settings.database_auto_create:
        await init_models(engine)

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("PostBoard Backend shutting down...")
    if engine is not None:
        await dispose_engine(engine)
    logger.info("Shutdown complete.")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Explicit settings; defaults to the module-level instance.
                      Every call builds fresh stores, so apps never share state.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="PostBoard API",
        description="Users and posts CRUD over an explicit middleware pipeline.",
        version=__version__,
        lifespan=lifespan,
    )

    stores, engine = build_stores(app_settings)
    pipeline = compose_pipeline(app_settings, stores)

    app.state.settings = app_settings
    app.state.stores = stores
    app.state.engine = engine
    app.state.pipeline = pipeline

    # Last added runs first: Request ID → Access Log → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    register_pipeline_routes(app, pipeline)
    register_exception_handlers(app, pipeline.boundary)

    return app


app = create_app()
