"""
Model artifact endpoints.

- GET /api/v1/model - Export the resident artifact (with adapted centroids)
- POST /api/v1/model/reload - Reload the artifact from the configured path
"""

from fastapi import APIRouter, Depends, HTTPException, status

from ...classification.service import VSMClassifierService
from ...models.api_models import ModelReloadResponse
from ...models.artifact import ModelArtifact
from ..dependencies import get_service

router = APIRouter(prefix="/api/v1/model")


@router.get("", response_model=ModelArtifact)
def export_model(service: VSMClassifierService = Depends(get_service)) -> ModelArtifact:
    """Export vocabulary, IDF and current centroids."""
    return service.export_model()


@router.post("/reload", response_model=ModelReloadResponse)
def reload_model(service: VSMClassifierService = Depends(get_service)) -> ModelReloadResponse:
    """
    Reload the artifact file; the resident model is kept if loading fails.
    """
    if not service.load_model_file():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Model artifact missing or malformed",
        )

    return ModelReloadResponse(
        success=True,
        state=service.state,
        vocabulary_size=service.vocabulary_size,
        labels=service.labels,
    )
