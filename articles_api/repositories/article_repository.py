"""
SQLAlchemy implementation of the ArticleRepository port.

Every store failure is re-raised as ``StorageError`` chained to the
original exception; a missing row is ``NotFoundError``.  There are no
retries here: a failed statement fails the request.
"""
import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from articles_api.entities import Article
from articles_api.errors import NotFoundError, StorageError
from articles_api.interfaces import ArticleRepository
from articles_api.models import ArticleModel

logger = logging.getLogger(__name__)

# Driver-level connection failures and timeouts can escape SQLAlchemy's
# wrapping.  asyncpg's command_timeout raises asyncio.TimeoutError, which
# is not an OSError before Python 3.11.
_STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)

# Upper bound of the Integer primary key column.
_MAX_ID = 2**31 - 1


def _as_utc(value: datetime) -> datetime:
    """Normalise to aware UTC; naive values (SQLite drops the zone) are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Stores articles in the ``articles`` table through an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        return Article(
            id=model.id,
            title=model.title,
            created_at=_as_utc(model.created_at),
        )

    async def create(self, article: Article) -> None:
        model = ArticleModel(title=article.title, created_at=_as_utc(article.created_at))
        self._session.add(model)
        try:
            await self._session.commit()
        except _STORE_ERRORS as exc:
            logger.error("Failed to create article: %s", exc)
            raise StorageError("create") from exc
        article.id = model.id

    async def get_by_id(self, article_id: int) -> Article:
        if article_id > _MAX_ID:
            logger.warning("Article not found: id=%d", article_id)
            raise NotFoundError(article_id)
        try:
            model = await self._session.get(ArticleModel, article_id)
        except _STORE_ERRORS as exc:
            logger.error("Database query failed for article id=%d: %s", article_id, exc)
            raise StorageError("get_by_id") from exc
        if model is None:
            logger.warning("Article not found: id=%d", article_id)
            raise NotFoundError(article_id)
        return self._to_entity(model)
