from articles_api.repositories.article_repository import SQLAlchemyArticleRepository

__all__ = ["SQLAlchemyArticleRepository"]
