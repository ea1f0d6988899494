"""
Runtime classification package.

Main components:
- service: VSMClassifierService (classify, learn, load/export model)
- model_store: artifact load/save with centroid validation
- fallback: sender heuristic for low-confidence results
"""

from .fallback import fallback_label
from .model_store import ModelArtifactError, load_artifact, parse_artifact, save_artifact
from .service import STATE_TRAINED, STATE_UNTRAINED, ModelState, VSMClassifierService

__all__ = [
    "VSMClassifierService",
    "ModelState",
    "STATE_TRAINED",
    "STATE_UNTRAINED",
    "ModelArtifactError",
    "load_artifact",
    "parse_artifact",
    "save_artifact",
    "fallback_label",
]
