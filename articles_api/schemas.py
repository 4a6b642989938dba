from datetime import datetime

from pydantic import BaseModel


# --- Article ---

class CreateArticleRequest(BaseModel):
    # Emptiness is a business rule checked by the service, not here.
    title: str


class CreateArticleResponse(BaseModel):
    id: int
    created_at: datetime


class ArticleResponse(BaseModel):
    id: int
    title: str
    created_at: datetime


# --- Errors ---

class ErrorResponse(BaseModel):
    error: str


# --- Metrics ---

class RequestStats(BaseModel):
    method: str
    path: str
    status: int
    count: int
    avg_duration_ms: float


class MetricsResponse(BaseModel):
    requests: list[RequestStats] = []
    total_requests: int = 0
