# track_proxy/api/health.py
import time
from fastapi import APIRouter, Request
from track_proxy.config import settings
from track_proxy.models.track_models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    return {
        "status": "ok",
        "timestamp": int(time.time() * 1000),
        "environment": request.app.state.environment,
        "version": settings.APP_VERSION,
    }
