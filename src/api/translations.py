"""Translation lifecycle API routes."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_translation_service
from src.db.session import get_db
from src.middleware.rate_limit import rate_limit_writes
from src.schemas.schemas import (
    TranslationCreateRequest,
    TranslationProgressUpdate,
    TranslationResponse,
    TranslationWithVideoResponse,
)
from src.services.translation_service import (
    DuplicateTranslationError,
    InvalidStatusTransitionError,
    TranslationService,
    VideoNotFoundError,
)

router = APIRouter(prefix="/v1/translations", tags=["Translations"])


@router.post(
    "",
    response_model=TranslationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a translation",
    description="Create a pending translation of a video into a target language.",
)
@rate_limit_writes()
async def create_translation(
    request: Request,
    payload: TranslationCreateRequest,
    db: AsyncSession = Depends(get_db),
    translations: TranslationService = Depends(get_translation_service),
):
    """
    Create a translation.

    A video can have at most one translation per target language.
    """
    try:
        translation = await translations.create_translation(
            payload.video_id, payload.target_language
        )
    except VideoNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateTranslationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    await db.commit()
    return translation


@router.get(
    "",
    response_model=list[TranslationWithVideoResponse],
    summary="List translations",
    description="Get all translations with their videos, newest first.",
)
async def list_translations(
    translations: TranslationService = Depends(get_translation_service),
):
    return await translations.list_translations()


@router.get(
    "/{translation_id}",
    response_model=TranslationWithVideoResponse,
    summary="Get a translation",
)
async def get_translation(
    translation_id: int,
    translations: TranslationService = Depends(get_translation_service),
):
    translation = await translations.get_translation(translation_id)

    if not translation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Translation {translation_id} not found",
        )

    return translation


@router.patch(
    "/{translation_id}/progress",
    response_model=TranslationResponse,
    summary="Report translation progress",
    description="Partially update status, progress and results. Called by the translation worker.",
)
@rate_limit_writes()
async def update_translation_progress(
    request: Request,
    translation_id: int,
    payload: TranslationProgressUpdate,
    db: AsyncSession = Depends(get_db),
    translations: TranslationService = Depends(get_translation_service),
):
    """
    Update a translation.

    Fields left out of the body are not touched; fields sent as null are cleared.
    """
    try:
        translation = await translations.update_translation_progress(
            translation_id, payload
        )
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if not translation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Translation {translation_id} not found",
        )

    await db.commit()
    return translation
