"""
Database Schema Reference
=========================

This file provides a quick reference for all database tables and columns.
For actual SQLAlchemy models, see: src/db/models.py

"""

# ============================================================================
# VIDEOS - Metadata of uploaded video files
# ============================================================================
#
# | Column            | Type                      | Constraints              |
# |-------------------|---------------------------|--------------------------|
# | id                | INTEGER                   | PRIMARY KEY, SERIAL      |
# | filename          | TEXT                      | NOT NULL                 |
# | original_filename | TEXT                      | NOT NULL                 |
# | file_path         | TEXT                      | NOT NULL                 |
# | file_size         | BIGINT                    | NOT NULL (bytes, > 0)    |
# | duration          | FLOAT                     | NULLABLE (seconds, > 0)  |
# | mime_type         | VARCHAR(100)              | NOT NULL                 |
# | original_language | ENUM(supported_languages) | NULLABLE                 |
# | uploaded_at       | TIMESTAMP(TZ)             | NOT NULL, INDEX          |
# | updated_at        | TIMESTAMP(TZ)             | NOT NULL                 |
#
# Relationships:
#   - translations: ONE-TO-MANY -> translations.video_id (no cascade, never deleted)


# ============================================================================
# TRANSLATIONS - One dubbed/transcribed variant of a video per language
# ============================================================================
#
# | Column                | Type                      | Constraints                   |
# |-----------------------|---------------------------|-------------------------------|
# | id                    | INTEGER                   | PRIMARY KEY, SERIAL           |
# | video_id              | INTEGER                   | NOT NULL, FK(videos.id), INDEX|
# | target_language       | ENUM(supported_languages) | NOT NULL                      |
# | status                | ENUM(translation_status)  | NOT NULL, DEFAULT 'pending'   |
# | progress_percentage   | INTEGER                   | NOT NULL, DEFAULT 0 (0-100)   |
# | translated_audio_path | TEXT                      | NULLABLE                      |
# | transcript_original   | TEXT                      | NULLABLE                      |
# | transcript_translated | TEXT                      | NULLABLE                      |
# | error_message         | TEXT                      | NULLABLE                      |
# | started_at            | TIMESTAMP(TZ)             | NULLABLE                      |
# | completed_at          | TIMESTAMP(TZ)             | NULLABLE                      |
# | created_at            | TIMESTAMP(TZ)             | NOT NULL, INDEX               |
# | updated_at            | TIMESTAMP(TZ)             | NOT NULL                      |
#
# Unique:
#   uq_translation_video_language (video_id, target_language)
#
# Relationships:
#   - video: MANY-TO-ONE -> videos.id


# ============================================================================
# ENUMS
# ============================================================================
#
#   supported_languages: 'en' | 'es' | 'fr' | 'de' | 'it' | 'pt' | 'ru' |
#                        'ja' | 'ko' | 'zh' | 'ar' | 'hi'
#
#   translation_status:  'pending' | 'processing' | 'completed' | 'failed'
#
# Lifecycle (enforced when STRICT_STATUS_TRANSITIONS is on):
#
#   pending ----> processing ----> completed
#      |              |
#      +--------------+----------> failed
#
#   Rewriting the current status is always allowed (progress-only updates).


# ============================================================================
# ER DIAGRAM (Text)
# ============================================================================
#
#  ┌──────────────────────┐
#  │        videos        │
#  ├──────────────────────┤
#  │ id (PK)              │───────────────┐
#  │ filename             │               │
#  │ original_filename    │               │
#  │ file_path            │               │
#  │ file_size            │               │
#  │ duration             │               │
#  │ mime_type            │               │
#  │ original_language    │               │
#  │ timestamps           │               │
#  └──────────────────────┘               │
#                                         │ 1:N
#  ┌──────────────────────┐               │
#  │     translations     │◄──────────────┘
#  ├──────────────────────┤
#  │ id (PK)              │
#  │ video_id (FK)        │
#  │ target_language      │  UNIQUE(video_id, target_language)
#  │ status               │
#  │ progress_percentage  │
#  │ results              │
#  │ error_message        │
#  │ timestamps           │
#  └──────────────────────┘
