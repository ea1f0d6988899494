"""
Health check endpoint for monitoring.
"""

import time
from fastapi import APIRouter, Depends

from ...classification.service import VSMClassifierService
from ...models.api_models import HealthResponse
from ...version import API_VERSION
from ..dependencies import get_service

router = APIRouter()

# Track start time for uptime calculation
_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(service: VSMClassifierService = Depends(get_service)) -> HealthResponse:
    """
    Health check endpoint for monitoring.

    Returns:
        Health status, uptime and whether a model is resident
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        uptime_seconds=time.time() - _start_time,
        model_state=service.state,
    )
