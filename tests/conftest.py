"""
Test infrastructure for the Articles API.

Strategy
--------
- SQLite in-memory via aiosqlite removes the need for a running Postgres
  instance in CI.
- StaticPool makes every session share one in-memory connection;
  SQLite in-memory databases are connection-scoped, so a second
  connection would see an empty database.
- Each test builds its own engine and its own app via ``create_app``;
  the app's ``get_db`` dependency is overridden to use the test session
  factory.  Tables are created before and dropped after every test.
- ``FakeArticleRepository`` and ``FakeArticleService`` implement the
  abstract ports so the service and the HTTP layer can be tested in
  isolation from the database.
"""
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import articles_api.models  # noqa: F401
from articles_api.config import Settings
from articles_api.database import Base, get_db
from articles_api.dependencies import get_article_service
from articles_api.entities import Article
from articles_api.errors import NotFoundError
from articles_api.interfaces import ArticleRepository, ArticleService
from articles_api.main import create_app
from articles_api.schemas import ArticleResponse, CreateArticleRequest, CreateArticleResponse

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2026, 10, 19, 12, 30, 45, 123456, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Test doubles for the ports
# ---------------------------------------------------------------------------

class FakeArticleRepository(ArticleRepository):
    """Dict-backed repository that records calls and can be told to fail."""

    def __init__(self, error: Exception | None = None):
        self.articles: dict[int, Article] = {}
        self.create_calls: list[Article] = []
        self.get_calls: list[int] = []
        self.error = error

    async def create(self, article: Article) -> None:
        self.create_calls.append(article)
        if self.error is not None:
            raise self.error
        article.id = len(self.articles) + 1
        self.articles[article.id] = Article(
            id=article.id, title=article.title, created_at=article.created_at
        )

    async def get_by_id(self, article_id: int) -> Article:
        self.get_calls.append(article_id)
        if self.error is not None:
            raise self.error
        if article_id not in self.articles:
            raise NotFoundError(article_id)
        return self.articles[article_id]


class FakeArticleService(ArticleService):
    """Service double returning canned responses or raising a given error."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.create_calls: list[CreateArticleRequest] = []
        self.get_calls: list[int] = []

    async def create(self, request: CreateArticleRequest) -> CreateArticleResponse:
        self.create_calls.append(request)
        if self.error is not None:
            raise self.error
        return CreateArticleResponse(id=1, created_at=FIXED_NOW)

    async def get_by_id(self, article_id: int) -> ArticleResponse:
        self.get_calls.append(article_id)
        if self.error is not None:
            raise self.error
        return ArticleResponse(id=article_id, title="Hello", created_at=FIXED_NOW)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    return Settings(DATABASE_URL=TEST_DATABASE_URL, DB_AUTO_CREATE=False)


@pytest_asyncio.fixture
async def engine_test():
    """In-memory engine with the schema created; dropped and disposed afterwards."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine_test) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine_test, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncSession:
    """A live AsyncSession for repository-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(settings, session_factory):
    """Application wired to the test database through a get_db override."""
    application = create_app(settings)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture
async def async_client(app) -> AsyncClient:
    """httpx.AsyncClient talking to the app through ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def fake_repository() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def fake_service() -> FakeArticleService:
    return FakeArticleService()


@pytest_asyncio.fixture
async def service_client(settings, fake_service) -> AsyncClient:
    """Client for an app whose ArticleService is ``fake_service``; no database involved."""
    application = create_app(settings)
    application.dependency_overrides[get_article_service] = lambda: fake_service
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
