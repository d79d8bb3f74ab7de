from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from contactbook.observability.metrics import get_metrics


router = APIRouter(prefix="/api", tags=["metrics"])


@router.get("/metrics")
async def metrics(request: Request) -> dict:
    if not request.app.state.settings.enable_metrics_endpoint:
        raise HTTPException(status_code=404, detail="Not found")
    return get_metrics().snapshot()
