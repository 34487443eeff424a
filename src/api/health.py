"""Health check and system info routes."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import get_settings
from src.db.models import TranslationStatus
from src.db.session import get_db
from src.schemas.schemas import HealthResponse, LanguageInfo

router = APIRouter(tags=["System"])

settings = get_settings()
logger = logging.getLogger(__name__)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the service and its database.",
)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check endpoint."""
    db_status = "ok"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "error"

    return HealthResponse(
        status="healthy" if db_status == "ok" else "degraded",
        version="1.0.0",
        database=db_status,
    )


@router.get(
    "/v1/languages",
    response_model=list[LanguageInfo],
    summary="List supported languages",
    description="Get all languages a video can be spoken in or translated into.",
)
async def list_languages():
    """Get list of supported languages."""
    return [
        LanguageInfo(code=code, name=name)
        for code, name in settings.language_names.items()
    ]


@router.get(
    "/v1/info",
    summary="Service information",
    description="Get general information about the service.",
)
async def service_info():
    """Get service information."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "environment": settings.app_env,
        "supported_languages": list(settings.language_names.keys()),
        "translation_statuses": [s.value for s in TranslationStatus],
        "strict_status_transitions": settings.strict_status_transitions,
        "documentation": "/docs",
        "redoc": "/redoc",
    }
