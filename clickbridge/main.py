from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from clickbridge.api import admin, health, landing
from clickbridge.core.config import Settings, settings as default_settings
from clickbridge.core.logging_config import configure_logging
from clickbridge.db.repository import ClickStore
from clickbridge.RateLimitHelper import check_rate_limit, is_admin_path, rate_limit_key
from clickbridge.services.context import BridgeContext
from clickbridge.services.security import SECURITY_HEADERS

logger = configure_logging(default_settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    context: BridgeContext = app.state.context
    logger.info(f"Application '{context.settings.PROJECT_NAME}' starting up ({context.settings.APP_ENV}).")
    await context.init()
    try:
        yield
    finally:
        logger.info("Shutting down gracefully...")
        await context.shutdown()


def create_app(settings: Optional[Settings] = None, store: Optional[ClickStore] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Landing page bridge from X ad clicks to WhatsApp conversations",
        lifespan=lifespan,
    )
    app.state.context = BridgeContext(settings, store=store)

    app.include_router(landing.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        if not is_admin_path(request.url.path):
            return await call_next(request)

        context: BridgeContext = request.app.state.context
        limit, window = context.settings.RATE_LIMIT_LIMIT, context.settings.RATE_LIMIT_WINDOW
        key = rate_limit_key(request)

        allowed = await check_rate_limit(context.redis_client, key, limit, window)
        if allowed is False:
            logger.warning(f"Rate limit exceeded for {key}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(window)},
                content={"detail": f"Too many requests. Limit is {limit} per {window} seconds."}
            )

        return await call_next(request)

    # registered last so it wraps every response, including rate limited ones
    @app.middleware("http")
    async def security_headers_middleware(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
            headers=SECURITY_HEADERS,
        )

    return app


app = create_app()
