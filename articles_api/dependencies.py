"""
FastAPI dependency wiring: session -> repository -> service.

Each request gets its own session from the application's session
factory (``get_db``), a repository bound to that session and a service
bound to that repository.  Tests replace any link through
``app.dependency_overrides``::

    app.dependency_overrides[get_article_service] = lambda: FakeService()
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from articles_api.database import get_db
from articles_api.interfaces import ArticleRepository, ArticleService
from articles_api.repositories import SQLAlchemyArticleRepository
from articles_api.services import DefaultArticleService


async def get_article_repository(db: AsyncSession = Depends(get_db)) -> ArticleRepository:
    return SQLAlchemyArticleRepository(db)


async def get_article_service(
    repository: ArticleRepository = Depends(get_article_repository),
) -> ArticleService:
    return DefaultArticleService(repository)
