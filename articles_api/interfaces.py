"""Abstract ports: the contracts each layer offers to the one above it."""

from abc import ABC, abstractmethod

from articles_api.entities import Article
from articles_api.schemas import ArticleResponse, CreateArticleRequest, CreateArticleResponse


class ArticleRepository(ABC):
    """Port for article persistence."""

    @abstractmethod
    async def create(self, article: Article) -> None:
        """
        Persist *article* and set its generated ``id`` in place.

        Raises ``StorageError`` when the write fails; ``article.id`` is
        left unset in that case.
        """
        ...

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article:
        """
        Load the article with *article_id*.

        Raises ``NotFoundError`` when no row matches and ``StorageError``
        for any other read failure.
        """
        ...


class ArticleService(ABC):
    """Port for the article use cases consumed by the HTTP layer."""

    @abstractmethod
    async def create(self, request: CreateArticleRequest) -> CreateArticleResponse:
        """Raises ``ValidationError`` or ``StorageError``."""
        ...

    @abstractmethod
    async def get_by_id(self, article_id: int) -> ArticleResponse:
        """Raises ``NotFoundError`` or ``StorageError``."""
        ...
