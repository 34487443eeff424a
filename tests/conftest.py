"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

# Keep the application engine off PostgreSQL during tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.db.models import Base, SupportedLanguage, Translation, Video
from src.db.session import configure_sqlite, get_db
from src.main import app
from src.middleware.rate_limit import limiter
from src.schemas.schemas import VideoCreateRequest
from src.services.translation_service import TranslationService
from src.services.video_service import VideoService


# Test database URL (in-memory SQLite, one database per test)
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with fresh rate limit counters."""
    limiter.reset()
    yield


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def video_service(db_session: AsyncSession) -> VideoService:
    return VideoService(db_session)


@pytest.fixture
def translation_service(db_session: AsyncSession) -> TranslationService:
    return TranslationService(db_session)


@pytest.fixture
def video_payload() -> dict:
    """Metadata of a typical uploaded video."""
    return {
        "filename": "test-video.mp4",
        "original_filename": "original-test.mp4",
        "file_path": "/uploads/test-video.mp4",
        "file_size": 1024000,
        "duration": 120.5,
        "mime_type": "video/mp4",
        "original_language": "en",
    }


@pytest_asyncio.fixture
async def video(video_service: VideoService, video_payload: dict) -> Video:
    """A registered video."""
    video = await video_service.register_video(VideoCreateRequest(**video_payload))
    await video_service.db.commit()
    return video


@pytest_asyncio.fixture
async def translation(
    translation_service: TranslationService, video: Video
) -> Translation:
    """A pending Spanish translation of ``video``."""
    translation = await translation_service.create_translation(
        video.id, SupportedLanguage.ES
    )
    await translation_service.db.commit()
    return translation
