"""
API request and response models for FastAPI endpoints.

This module defines the Pydantic models used for API request/response validation.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .pipeline_version import PipelineVersion


class ClassifyRequest(BaseModel):
    """A message to classify."""

    subject: str = Field(default="", description="Subject line")
    sender: str = Field(default="", description="Sender address")
    body: str = Field(default="", description="Message body (plain text or HTML)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "subject": "Verify your account now",
                "sender": "security@fake-bank.com",
                "body": "Your account will be suspended unless you confirm your password.",
            }
        }
    }


class ClassificationResult(BaseModel):
    """Nearest-centroid label with its cosine similarity."""

    label: str = Field(description="Assigned category")
    score: float = Field(description="Cosine similarity of the best centroid")
    fallback_used: bool = Field(
        default=False, description="True when the sender heuristic overrode a low-confidence match"
    )


class ClassifyBatchRequest(BaseModel):
    """Request model for batch classification."""

    items: List[ClassifyRequest] = Field(..., description="Messages to classify")


class ClassifyBatchResponse(BaseModel):
    """Response model for batch classification."""

    results: List[ClassificationResult]
    total: int


class LabeledEmail(BaseModel):
    """A user's email carrying the label they assigned or confirmed."""

    subject: Optional[str] = None
    sender: Optional[str] = None
    body: Optional[str] = None
    text: Optional[str] = Field(default=None, description="Alias of body")
    label: Optional[str] = None

    @property
    def content(self) -> str:
        return self.body or self.text or ""


class LearnRequest(BaseModel):
    """Request model for incremental learning."""

    emails: List[LabeledEmail] = Field(..., description="Newly labeled emails")


class LearnResponse(BaseModel):
    """Acknowledgement for a scheduled learning batch."""

    accepted: int = Field(description="Emails submitted for learning")
    scheduled: bool = True


class ModelReloadResponse(BaseModel):
    """Result of reloading the model artifact."""

    success: bool
    state: str
    vocabulary_size: int
    labels: List[str]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(description="Service uptime")
    model_state: str = Field(description="untrained or trained")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    pipeline_version: PipelineVersion = Field(description="Current pipeline version")
