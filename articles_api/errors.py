"""
Article error taxonomy.

Repositories and services raise these; only the HTTP layer turns them
into status codes:

    ValidationError -> 400
    NotFoundError   -> 404
    StorageError    -> 500
"""


class ArticleError(Exception):
    """Base class for every error the article pipeline reports."""


class ValidationError(ArticleError):
    """Caller input violates a business rule."""


class NotFoundError(ArticleError):
    """No article exists for the requested identifier."""

    def __init__(self, article_id: int):
        self.article_id = article_id
        super().__init__(f"article with id '{article_id}' not found")


class StorageError(ArticleError):
    """
    The store could not complete *operation*.

    The underlying driver/ORM exception is kept as ``__cause__``; its
    text is for logs only and never reaches an HTTP response.
    """

    def __init__(self, operation: str, message: str | None = None):
        self.operation = operation
        super().__init__(message or f"storage failure during {operation}")
