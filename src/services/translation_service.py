"""Translation lifecycle service."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.db.models import SupportedLanguage, Translation, TranslationStatus
from src.schemas.schemas import TranslationProgressUpdate
from src.services.video_service import VideoService

logger = logging.getLogger(__name__)


# Status writes accepted in strict mode, besides rewriting the current status
ALLOWED_TRANSITIONS: dict[TranslationStatus, frozenset[TranslationStatus]] = {
    TranslationStatus.PENDING: frozenset(
        {TranslationStatus.PROCESSING, TranslationStatus.FAILED}
    ),
    TranslationStatus.PROCESSING: frozenset(
        {TranslationStatus.COMPLETED, TranslationStatus.FAILED}
    ),
    TranslationStatus.COMPLETED: frozenset(),
    TranslationStatus.FAILED: frozenset(),
}

TERMINAL_STATUSES = frozenset({TranslationStatus.COMPLETED, TranslationStatus.FAILED})


class TranslationServiceError(Exception):
    """Base class for translation lifecycle errors."""


class VideoNotFoundError(TranslationServiceError):
    """The referenced video does not exist."""

    def __init__(self, video_id: int):
        self.video_id = video_id
        super().__init__(f"Video with ID {video_id} not found")


class DuplicateTranslationError(TranslationServiceError):
    """A translation for this video and language already exists."""

    def __init__(self, target_language: SupportedLanguage, video_id: int):
        self.target_language = target_language
        self.video_id = video_id
        super().__init__(
            f"Translation to {target_language.value} already exists for video {video_id}"
        )


class InvalidStatusTransitionError(TranslationServiceError):
    """The requested status change is not part of the lifecycle."""

    def __init__(self, current: TranslationStatus, requested: TranslationStatus):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot change translation status from {current.value} to {requested.value}"
        )


def is_transition_allowed(current: TranslationStatus, requested: TranslationStatus) -> bool:
    """Whether a translation in ``current`` may be set to ``requested``."""
    return current == requested or requested in ALLOWED_TRANSITIONS[current]


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TranslationService:
    """Creates translations and tracks their progress."""

    def __init__(
        self,
        db: AsyncSession,
        videos: Optional[VideoService] = None,
        strict_transitions: bool = True,
    ):
        self.db = db
        self.videos = videos or VideoService(db)
        self.strict_transitions = strict_transitions

    async def create_translation(
        self,
        video_id: int,
        target_language: SupportedLanguage,
    ) -> Translation:
        """
        Create a pending translation of a video.

        The (video, language) unique constraint is the only duplicate check,
        so concurrent identical requests fail the same way as sequential ones.

        Args:
            video_id: ID of the video to translate
            target_language: Language to translate into

        Returns:
            Created Translation

        Raises:
            VideoNotFoundError: The video does not exist
            DuplicateTranslationError: The video already has this translation
        """
        if await self.videos.get_video(video_id) is None:
            logger.warning(f"Translation requested for missing video {video_id}")
            raise VideoNotFoundError(video_id)

        now = datetime.now(timezone.utc)
        translation = Translation(
            video_id=video_id,
            target_language=target_language,
            status=TranslationStatus.PENDING,
            progress_percentage=0,
            translated_audio_path=None,
            transcript_original=None,
            transcript_translated=None,
            error_message=None,
            started_at=None,
            completed_at=None,
            created_at=now,
            updated_at=now,
        )

        try:
            async with self.db.begin_nested():
                self.db.add(translation)
                await self.db.flush()
        except IntegrityError as e:
            if await self.videos.get_video(video_id) is None:
                raise VideoNotFoundError(video_id) from e
            logger.warning(
                f"Duplicate translation to {target_language.value} for video {video_id}"
            )
            raise DuplicateTranslationError(target_language, video_id) from e

        logger.info(
            f"Created translation {translation.id} of video {video_id} "
            f"to {target_language.value}"
        )
        return translation

    async def update_translation_progress(
        self,
        translation_id: int,
        update: TranslationProgressUpdate,
    ) -> Optional[Translation]:
        """
        Apply a partial progress update.

        Every field present in ``update`` overwrites the stored value, nulls
        included; absent fields are kept. ``updated_at`` always moves forward.

        Returns:
            Updated Translation, or None if it does not exist (nothing written)

        Raises:
            InvalidStatusTransitionError: Strict mode and the status change
                is not part of the lifecycle
        """
        translation = await self._get(translation_id)
        if translation is None:
            return None

        changes = update.changes()

        requested = changes.get("status")
        if requested is not None and self.strict_transitions:
            if not is_transition_allowed(translation.status, requested):
                logger.warning(
                    f"Rejected status change of translation {translation_id}: "
                    f"{translation.status.value} -> {requested.value}"
                )
                raise InvalidStatusTransitionError(translation.status, requested)

        for field, value in changes.items():
            setattr(translation, field, value)

        now = datetime.now(timezone.utc)
        previous = _as_utc(translation.updated_at)
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        translation.updated_at = now

        await self.db.flush()

        logger.info(
            f"Updated translation {translation_id}: status={translation.status.value} "
            f"progress={translation.progress_percentage}%"
        )
        if requested in TERMINAL_STATUSES:
            logger.info(f"Translation {translation_id} reached {requested.value}")

        return translation

    async def get_translations_for_video(self, video_id: int) -> list[Translation]:
        """Get all translations of a video, newest first."""
        result = await self.db.execute(
            select(Translation)
            .where(Translation.video_id == video_id)
            .order_by(Translation.created_at.desc(), Translation.id.desc())
        )
        return list(result.scalars().all())

    async def get_translation(self, translation_id: int) -> Optional[Translation]:
        """Get a translation with its video loaded, or None."""
        result = await self.db.execute(
            select(Translation)
            .where(Translation.id == translation_id)
            .options(selectinload(Translation.video))
        )
        return result.scalar_one_or_none()

    async def list_translations(self) -> list[Translation]:
        """Get all translations with their videos loaded, newest first."""
        result = await self.db.execute(
            select(Translation)
            .options(selectinload(Translation.video))
            .order_by(Translation.created_at.desc(), Translation.id.desc())
        )
        return list(result.scalars().all())

    async def _get(self, translation_id: int) -> Optional[Translation]:
        result = await self.db.execute(
            select(Translation).where(Translation.id == translation_id)
        )
        return result.scalar_one_or_none()
