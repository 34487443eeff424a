"""Video catalog API routes."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_translation_service, get_video_service
from src.db.session import get_db
from src.middleware.rate_limit import rate_limit_writes
from src.schemas.schemas import TranslationResponse, VideoCreateRequest, VideoResponse
from src.services.translation_service import TranslationService
from src.services.video_service import VideoService

router = APIRouter(prefix="/v1/videos", tags=["Videos"])


@router.post(
    "",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an uploaded video",
    description="Store the metadata of an uploaded video file.",
)
@rate_limit_writes()
async def register_video(
    request: Request,
    payload: VideoCreateRequest,
    db: AsyncSession = Depends(get_db),
    videos: VideoService = Depends(get_video_service),
):
    """
    Register a video.

    - **file_size**: Size in bytes, must be positive
    - **duration**: Seconds, positive, or null if not measured yet
    - **original_language**: One of the supported language codes, or null
    """
    video = await videos.register_video(payload)
    await db.commit()
    return video


@router.get(
    "",
    response_model=list[VideoResponse],
    summary="List videos",
    description="Get all videos, most recently uploaded first.",
)
async def list_videos(videos: VideoService = Depends(get_video_service)):
    return await videos.list_videos()


@router.get(
    "/{video_id}",
    response_model=VideoResponse,
    summary="Get a video",
)
async def get_video(video_id: int, videos: VideoService = Depends(get_video_service)):
    video = await videos.get_video(video_id)

    if not video:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Video {video_id} not found",
        )

    return video


@router.get(
    "/{video_id}/translations",
    response_model=list[TranslationResponse],
    summary="List translations of a video",
    description="Get all translations of a video, newest first. Unknown videos yield an empty list.",
)
async def list_video_translations(
    video_id: int,
    translations: TranslationService = Depends(get_translation_service),
):
    return await translations.get_translations_for_video(video_id)
