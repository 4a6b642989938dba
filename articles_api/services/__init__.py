# Services package.
#
# article_service: DefaultArticleService, the business-rule layer between
#                  the HTTP routers and the ArticleRepository port.
#
# Services are constructed per request by ``articles_api.dependencies``
# with the repository injected, so tests can swap either side.
from articles_api.services.article_service import DefaultArticleService

__all__ = ["DefaultArticleService"]
