"""Initial migration

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LANGUAGES = ('en', 'es', 'fr', 'de', 'it', 'pt', 'ru', 'ja', 'ko', 'zh', 'ar', 'hi')
STATUSES = ('pending', 'processing', 'completed', 'failed')

# Shared by both tables, so created once up front
supported_languages = postgresql.ENUM(*LANGUAGES, name='supported_languages', create_type=False)
translation_status = postgresql.ENUM(*STATUSES, name='translation_status', create_type=False)


def upgrade() -> None:
    bind = op.get_bind()
    supported_languages.create(bind, checkfirst=True)
    translation_status.create(bind, checkfirst=True)

    # Create videos table
    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('filename', sa.Text(), nullable=False),
        sa.Column('original_filename', sa.Text(), nullable=False),
        sa.Column('file_path', sa.Text(), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=True),
        sa.Column('mime_type', sa.String(100), nullable=False),
        sa.Column('original_language', supported_languages, nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Create translations table
    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id'), nullable=False),
        sa.Column('target_language', supported_languages, nullable=False),
        sa.Column('status', translation_status, nullable=False, server_default='pending'),
        sa.Column('progress_percentage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('translated_audio_path', sa.Text(), nullable=True),
        sa.Column('transcript_original', sa.Text(), nullable=True),
        sa.Column('transcript_translated', sa.Text(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('video_id', 'target_language', name='uq_translation_video_language'),
    )

    # Create indexes
    op.create_index('ix_videos_uploaded_at', 'videos', ['uploaded_at'])
    op.create_index('ix_translations_video_id', 'translations', ['video_id'])
    op.create_index('ix_translations_created_at', 'translations', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_translations_created_at')
    op.drop_index('ix_translations_video_id')
    op.drop_index('ix_videos_uploaded_at')
    op.drop_table('translations')
    op.drop_table('videos')
    op.execute('DROP TYPE IF EXISTS translation_status')
    op.execute('DROP TYPE IF EXISTS supported_languages')
