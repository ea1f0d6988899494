"""
Classification API routes.

Provides REST endpoints for:
- POST /api/v1/classify - Single email classification
- POST /api/v1/classify/batch - Batch classification
- POST /api/v1/learn - Incremental learning (queued, runs after the response)
"""

from fastapi import APIRouter, Depends, status
import structlog

from ...classification.service import VSMClassifierService
from ...models.api_models import (
    ClassificationResult,
    ClassifyBatchRequest,
    ClassifyBatchResponse,
    ClassifyRequest,
    LearnRequest,
    LearnResponse,
)
from ..dependencies import get_service


logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1")


@router.post("/classify", response_model=ClassificationResult)
def classify(
    request: ClassifyRequest,
    service: VSMClassifierService = Depends(get_service),
) -> ClassificationResult:
    """
    Classify one email by nearest centroid.

    Always answers with a label: low-confidence matches fall back to the
    sender heuristic.
    """
    return service.classify(request.subject, request.sender, request.body)


@router.post("/classify/batch", response_model=ClassifyBatchResponse)
def classify_batch(
    request: ClassifyBatchRequest,
    service: VSMClassifierService = Depends(get_service),
) -> ClassifyBatchResponse:
    """Classify several emails against the same model snapshot."""
    results = service.classify_batch(request.items)
    logger.info("batch_classification_completed", total=len(results))
    return ClassifyBatchResponse(results=results, total=len(results))


@router.post("/learn", response_model=LearnResponse, status_code=status.HTTP_202_ACCEPTED)
def learn(
    request: LearnRequest,
    service: VSMClassifierService = Depends(get_service),
) -> LearnResponse:
    """
    Accept newly labeled emails for incremental learning.

    Batches join the service's learn queue and apply one at a time;
    classifications issued before a batch finishes use the previous centroids.
    """
    service.schedule_learn(request.emails)
    return LearnResponse(accepted=len(request.emails))
