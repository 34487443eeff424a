"""FastAPI dependencies that build services on the request session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import get_settings
from src.db.session import get_db
from src.services.translation_service import TranslationService
from src.services.video_service import VideoService


def get_video_service(db: AsyncSession = Depends(get_db)) -> VideoService:
    return VideoService(db)


def get_translation_service(
    db: AsyncSession = Depends(get_db),
    videos: VideoService = Depends(get_video_service),
) -> TranslationService:
    return TranslationService(
        db,
        videos=videos,
        strict_transitions=get_settings().strict_status_transitions,
    )
