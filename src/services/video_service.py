"""Video catalog service."""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Video
from src.schemas.schemas import VideoCreateRequest

logger = logging.getLogger(__name__)


class VideoService:
    """Records video metadata and serves it back unmodified."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register_video(self, request: VideoCreateRequest) -> Video:
        """
        Register an uploaded video.

        The file itself is not touched; ``file_path`` is stored as given.

        Args:
            request: Validated video metadata

        Returns:
            Created Video
        """
        now = datetime.now(timezone.utc)
        video = Video(
            filename=request.filename,
            original_filename=request.original_filename,
            file_path=request.file_path,
            file_size=request.file_size,
            duration=request.duration,
            mime_type=request.mime_type,
            original_language=request.original_language,
            uploaded_at=now,
            updated_at=now,
        )
        self.db.add(video)
        await self.db.flush()

        logger.info(f"Registered video {video.id} ({video.original_filename})")
        return video

    async def list_videos(self) -> list[Video]:
        """Get all videos, most recently uploaded first."""
        result = await self.db.execute(
            select(Video).order_by(Video.uploaded_at.desc(), Video.id.desc())
        )
        return list(result.scalars().all())

    async def get_video(self, video_id: int) -> Optional[Video]:
        """Get a video by ID, or None."""
        result = await self.db.execute(select(Video).where(Video.id == video_id))
        return result.scalar_one_or_none()
