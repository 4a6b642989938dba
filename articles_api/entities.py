"""Domain entities: plain dataclasses, no ORM or web framework types."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Article:
    """
    A single article.

    ``id`` stays None until the repository has persisted the article;
    ``created_at`` is assigned by the service, never by the store.
    """

    title: str
    created_at: datetime
    id: int | None = None
