from fastapi import APIRouter, Request

from articles_api.schemas import MetricsResponse

router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics(request: Request):
    return MetricsResponse(**request.app.state.metrics.snapshot())
