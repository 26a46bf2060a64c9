import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from flashdeck import models  # noqa: F401  (registers tables on Base.metadata)
from flashdeck.api.deps import get_media_store
from flashdeck.client.api import FlashcardAPIClient
from flashdeck.db.base import Base
from flashdeck.db.session import get_db
from flashdeck.main import app
from flashdeck.services.media_service import MediaStore

# --- In-memory test database ---
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def test_session(session_factory):
    """Create test database session"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def media_store(tmp_path):
    """Media store rooted in a per-test directory"""
    store = MediaStore(tmp_path / "uploads")
    store.ensure_root()
    return store


@pytest.fixture
def test_app(session_factory, media_store):
    """The FastAPI app wired to the test database and media store"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_store] = lambda: media_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def api_client(test_app):
    async with FlashcardAPIClient(
        base_url="http://test/api", transport=ASGITransport(app=test_app)
    ) as api:
        yield api


# --- Sample data fixtures ---
@pytest.fixture
def sample_deck_data():
    """Sample deck creation data"""
    return {
        "name": "Spanish",
        "description": "Everyday vocabulary",
    }


@pytest.fixture
def sample_flashcard_data():
    """Sample flashcard creation data"""
    return {
        "question": "How do you say 'to eat'?",
        "answer": "comer",
        "category": "Verbs",
        "hint": "Starts with 'c'",
    }


@pytest.fixture
def png_bytes():
    """A few bytes standing in for an uploaded PNG"""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
