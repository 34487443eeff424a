"""Application factory and ASGI entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api import health, translations, videos
from src.config import get_settings
from src.db.session import init_db
from src.middleware.rate_limit import limiter
from src.schemas.schemas import ErrorResponse

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Video Translation Service"
SERVICE_VERSION = "1.0.0"

API_DESCRIPTION = """
Catalog of uploaded videos and the lifecycle of their translations.

A translation starts as `pending` for one target language of one video.
The translation worker reports back through
`PATCH /v1/translations/{id}/progress`, moving it along
`pending` → `processing` → `completed` | `failed`.

A video has at most one translation per target language
(en, es, fr, de, it, pt, ru, ja, ko, zh, ar, hi).
Write endpoints are rate-limited per client address.
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{SERVICE_NAME} {SERVICE_VERSION} starting ({settings.app_env})")
    try:
        await init_db()
    except Exception as e:
        logger.error(f"Could not prepare database schema: {e}")
        raise
    logger.info("Database schema ready")

    yield

    logger.info(f"{SERVICE_NAME} stopped")


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn anything the routes did not handle into a 500 ErrorResponse."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    body = ErrorResponse(
        error="Internal server error",
        detail=str(exc) if settings.debug else "An unexpected error occurred",
    )
    return JSONResponse(status_code=500, content=body.model_dump())


async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


def create_app() -> FastAPI:
    """Build the FastAPI application with limiter, CORS and routers attached."""
    application = FastAPI(
        title=SERVICE_NAME,
        description=API_DESCRIPTION,
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    application.add_exception_handler(Exception, global_exception_handler)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for module in (health, videos, translations):
        application.include_router(module.router)
    application.add_api_route("/", root, methods=["GET"], tags=["Root"])

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
