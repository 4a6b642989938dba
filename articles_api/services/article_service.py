"""
Article service: business rules for the Article aggregate.

Design notes
------------
- The only rule is that a title must not be empty.  It is checked before
  the repository is touched, so an empty title never reaches the store.
  Whitespace-only titles are accepted; there are no length limits or
  duplicate checks.
- ``created_at`` comes from the injected clock (UTC), not from the
  database, so the value returned on create is exactly the value read
  back later.
- Repository errors (``NotFoundError``, ``StorageError``) propagate
  unchanged; this layer only adds log context.
"""
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from articles_api.entities import Article
from articles_api.errors import ArticleError, ValidationError
from articles_api.interfaces import ArticleRepository, ArticleService
from articles_api.schemas import ArticleResponse, CreateArticleRequest, CreateArticleResponse

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DefaultArticleService(ArticleService):
    """Orchestrates article use cases on top of an ArticleRepository."""

    def __init__(
        self,
        repository: ArticleRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._repository = repository
        self._clock = clock

    async def create(self, request: CreateArticleRequest) -> CreateArticleResponse:
        if request.title == "":
            logger.warning("Creation attempt with empty title")
            raise ValidationError("title cannot be empty")

        article = Article(title=request.title, created_at=self._clock())
        logger.info("Creating new article: title=%r", request.title)

        await self._repository.create(article)

        logger.info("Article created successfully: id=%d", article.id)
        return CreateArticleResponse(id=article.id, created_at=article.created_at)

    async def get_by_id(self, article_id: int) -> ArticleResponse:
        try:
            article = await self._repository.get_by_id(article_id)
        except ArticleError as exc:
            logger.warning("Failed to retrieve article id=%d: %s", article_id, exc)
            raise
        return ArticleResponse(
            id=article.id,
            title=article.title,
            created_at=article.created_at,
        )
