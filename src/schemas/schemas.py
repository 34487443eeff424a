"""Pydantic schemas for request/response validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.db.models import SupportedLanguage, TranslationStatus


# ============== Language Normalization ==============

LANGUAGE_ALIASES = {
    "eng": "en",
    "english": "en",
    "spa": "es",
    "spanish": "es",
    "fra": "fr",
    "french": "fr",
    "deu": "de",
    "german": "de",
    "ita": "it",
    "italian": "it",
    "por": "pt",
    "portuguese": "pt",
    "rus": "ru",
    "russian": "ru",
    "jpn": "ja",
    "japanese": "ja",
    "kor": "ko",
    "korean": "ko",
    "zho": "zh",
    "chinese": "zh",
    "ara": "ar",
    "arabic": "ar",
    "hin": "hi",
    "hindi": "hi",
}


def normalize_language(lang):
    """Normalize language code to standard format."""
    if not isinstance(lang, str):
        return lang
    lang = lang.lower().strip()
    return LANGUAGE_ALIASES.get(lang, lang)


# ============== Video Schemas ==============


class VideoCreateRequest(BaseModel):
    """Metadata of an uploaded video to register in the catalog."""

    filename: str = Field(..., description="Storage file name")
    original_filename: str = Field(..., description="File name as uploaded by the user")
    file_path: str = Field(..., description="Storage locator of the file")
    file_size: int = Field(..., gt=0, description="File size in bytes")
    duration: Optional[float] = Field(
        None, gt=0, description="Duration in seconds (null if not measured yet)"
    )
    mime_type: str = Field(..., description="MIME type, e.g. video/mp4")
    original_language: Optional[SupportedLanguage] = Field(
        None, description="Spoken language of the video (null if unknown)"
    )

    @field_validator("original_language", mode="before")
    @classmethod
    def normalize_lang(cls, v):
        return normalize_language(v)


class VideoResponse(BaseModel):
    """A registered video."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    original_filename: str
    file_path: str
    file_size: int
    duration: Optional[float] = None
    mime_type: str
    original_language: Optional[SupportedLanguage] = None
    uploaded_at: datetime
    updated_at: datetime


# ============== Translation Schemas ==============


class TranslationCreateRequest(BaseModel):
    """Request to translate a video into a target language."""

    video_id: int = Field(..., description="ID of the video to translate")
    target_language: SupportedLanguage = Field(..., description="Target language code")

    @field_validator("target_language", mode="before")
    @classmethod
    def normalize_lang(cls, v):
        return normalize_language(v)


class TranslationProgressUpdate(BaseModel):
    """
    Partial update reported by the translation worker.

    Only the fields present in the request body are written. A nullable
    field sent as ``null`` is cleared; a field left out is kept as is.
    """

    status: Optional[TranslationStatus] = None
    progress_percentage: Optional[int] = Field(None, ge=0, le=100)
    translated_audio_path: Optional[str] = None
    transcript_original: Optional[str] = None
    transcript_translated: Optional[str] = None
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @model_validator(mode="after")
    def reject_cleared_required_fields(self):
        for name in ("status", "progress_percentage"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields explicitly provided by the caller, nulls included."""
        return self.model_dump(exclude_unset=True)


class TranslationResponse(BaseModel):
    """A translation without its video."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    video_id: int
    target_language: SupportedLanguage
    status: TranslationStatus
    progress_percentage: int
    translated_audio_path: Optional[str] = None
    transcript_original: Optional[str] = None
    transcript_translated: Optional[str] = None
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class TranslationWithVideoResponse(TranslationResponse):
    """A translation joined with the full record of its video."""

    video: VideoResponse


# ============== Health & Misc Schemas ==============


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: Optional[str] = None


class LanguageInfo(BaseModel):
    """Information about a supported language."""

    code: str
    name: str
