from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from learn_python.observability.metrics import METRICS_CONTENT_TYPE, get_metrics


router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_class=Response)
async def metrics() -> Response:
    """Current counters and histograms in Prometheus text exposition format."""

    return Response(content=get_metrics().render(), media_type=METRICS_CONTENT_TYPE)
