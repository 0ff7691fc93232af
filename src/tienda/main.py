"""FastAPI application factory.

create_app() returns a configured FastAPI instance. Everything shared
across requests (notification channels, entity cache) is built here once
and parked on app.state; the lifespan handles what needs I/O (schema,
Redis, shutdown).
"""

from contextlib import asynccontextmanager

import redis.asyncio as aioredis
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tienda import __version__
from tienda.api import api_router
from tienda.cache import build_cache
from tienda.config import settings
from tienda.errors import install_error_handlers
from tienda.realtime.channels import build_channels

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "tienda.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        cache=settings.cache_backend,
    )

    from tienda.db.engine import async_session_factory, create_schema, engine

    await create_schema()
    if settings.seed_on_startup:
        from tienda.db.seed import seed_catalog

        async with async_session_factory() as session:
            await seed_catalog(session)

    # Redis is optional; only rate limiting needs a live connection here
    try:
        redis = aioredis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
        await redis.ping()
        app.state.redis = redis
        logger.info("tienda.redis_connected", url=settings.redis_url)
    except (aioredis.RedisError, OSError) as e:
        logger.warning("tienda.redis_unavailable", error=str(e))

    yield

    logger.info("tienda.shutdown")

    await app.state.channels.close_all()
    await app.state.cache.close()
    redis = getattr(app.state, "redis", None)
    if redis is not None:
        await redis.aclose()
        app.state.redis = None
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Tienda API",
        description="Store back-office: catalog, clients and staff with live notifications",
        version=__version__,
        lifespan=lifespan,
    )

    # Shared singletons for this process
    app.state.channels = build_channels(send_timeout=settings.ws_send_timeout_seconds)
    app.state.cache = build_cache(
        settings.cache_backend,
        ttl_seconds=settings.cache_ttl_seconds,
        redis_url=settings.redis_url,
    )
    app.state.redis = None

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RateLimit → Security → RequestId → handler

    from tienda.middleware.rate_limit import RateLimitMiddleware
    from tienda.middleware.request_id import RequestIdMiddleware
    from tienda.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    app.include_router(api_router)

    from tienda.realtime.websocket import router as ws_router
    app.include_router(ws_router)

    return app


# Default app instance (used by uvicorn: tienda.main:app)
app = create_app()
