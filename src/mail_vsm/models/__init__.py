# Data models for the vector space model classifier

from .labels import EmailLabel
from .pipeline_version import PipelineVersion
from .training import CorpusStats, TrainingRecord, TrainingStats
from .artifact import ModelArtifact
from .api_models import (
    ClassificationResult,
    ClassifyBatchRequest,
    ClassifyBatchResponse,
    ClassifyRequest,
    HealthResponse,
    LabeledEmail,
    LearnRequest,
    LearnResponse,
    ModelReloadResponse,
    VersionResponse,
)

__all__ = [
    "EmailLabel",
    "PipelineVersion",
    "TrainingRecord",
    "CorpusStats",
    "TrainingStats",
    "ModelArtifact",
    "ClassificationResult",
    "ClassifyRequest",
    "ClassifyBatchRequest",
    "ClassifyBatchResponse",
    "LabeledEmail",
    "LearnRequest",
    "LearnResponse",
    "ModelReloadResponse",
    "HealthResponse",
    "VersionResponse",
]
