import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from articles_api.dependencies import get_article_service
from articles_api.errors import NotFoundError, StorageError, ValidationError
from articles_api.interfaces import ArticleService
from articles_api.schemas import (
    ArticleResponse,
    CreateArticleRequest,
    CreateArticleResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])


@router.post(
    "",
    status_code=201,
    response_model=CreateArticleResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_article(
    data: CreateArticleRequest,
    service: ArticleService = Depends(get_article_service),
):
    try:
        return await service.create(data)
    except ValidationError as exc:
        logger.warning("Rejected article: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except StorageError as exc:
        logger.error("Failed to create article: %s (cause: %r)", exc, exc.__cause__)
        raise HTTPException(status_code=500, detail="failed to create article")


@router.get(
    "/{article_id}",
    response_model=ArticleResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_article(
    article_id: int = Path(..., ge=0),
    service: ArticleService = Depends(get_article_service),
):
    try:
        return await service.get_by_id(article_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="article not found")
    except StorageError as exc:
        logger.error("Failed to fetch article id=%d: %s (cause: %r)", article_id, exc, exc.__cause__)
        raise HTTPException(status_code=500, detail="failed to fetch article")
