"""Database models for the video translation service."""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    BigInteger,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.db.session import Base


class SupportedLanguage(str, enum.Enum):
    """Languages a video can be spoken in or translated into."""

    EN = "en"
    ES = "es"
    FR = "fr"
    DE = "de"
    IT = "it"
    PT = "pt"
    RU = "ru"
    JA = "ja"
    KO = "ko"
    ZH = "zh"
    AR = "ar"
    HI = "hi"


class TranslationStatus(str, enum.Enum):
    """Lifecycle status of a translation."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


# Store member values ("en", "pending"), not member names
language_enum = Enum(
    SupportedLanguage, name="supported_languages", values_callable=_enum_values
)
status_enum = Enum(
    TranslationStatus, name="translation_status", values_callable=_enum_values
)


class Video(Base):
    """Metadata of an uploaded video file."""

    __tablename__ = "videos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(Text)  # Storage name
    original_filename: Mapped[str] = mapped_column(Text)  # Display name
    file_path: Mapped[str] = mapped_column(Text)
    file_size: Mapped[int] = mapped_column(BigInteger)  # Bytes
    duration: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # Seconds
    mime_type: Mapped[str] = mapped_column(String(100))
    original_language: Mapped[Optional[SupportedLanguage]] = mapped_column(
        language_enum, nullable=True
    )

    # Timestamps
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    translations: Mapped[list["Translation"]] = relationship(
        "Translation", back_populates="video"
    )


class Translation(Base):
    """A dubbed/transcribed variant of a video in one target language."""

    __tablename__ = "translations"
    __table_args__ = (
        UniqueConstraint(
            "video_id", "target_language", name="uq_translation_video_language"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    video_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("videos.id"), index=True
    )
    target_language: Mapped[SupportedLanguage] = mapped_column(language_enum)

    # Processing
    status: Mapped[TranslationStatus] = mapped_column(
        status_enum, default=TranslationStatus.PENDING
    )
    progress_percentage: Mapped[int] = mapped_column(Integer, default=0)

    # Results
    translated_audio_path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    transcript_original: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    transcript_translated: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    video: Mapped["Video"] = relationship("Video", back_populates="translations")
