"""
Model artifact persistence.

Artifacts are plain JSON (see models.artifact). Loading validates the
structure and drops each centroid that is not a list of finite numbers of
vocabulary length instead of rejecting the whole artifact.
"""

import json
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
from pydantic import ValidationError

from ..models.artifact import ModelArtifact


logger = structlog.get_logger(__name__)


class ModelArtifactError(ValueError):
    """Artifact is missing, not JSON, or lacks required fields."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _clean_centroid(label: str, vector: Any, dimensions: int) -> Optional[List[float]]:
    """Centroid as floats, or None (logged) when it cannot be used."""
    if not isinstance(vector, list) or not all(_is_number(v) for v in vector):
        logger.warning("centroid_malformed", label=label)
        return None

    if len(vector) != dimensions:
        logger.warning(
            "centroid_dimension_mismatch",
            label=label,
            expected=dimensions,
            actual=len(vector),
        )
        return None

    return [float(v) for v in vector]


def sanitize_artifact(
    artifact: ModelArtifact,
    raw_centroids: Optional[Dict[str, Any]] = None,
) -> ModelArtifact:
    """
    Keep only centroids that are finite numeric vectors of vocabulary size.

    Args:
        artifact: Artifact whose vocabulary and IDF table are already valid
        raw_centroids: Unvalidated centroid map to use instead of
            ``artifact.centroids``

    Returns:
        A new artifact containing only well-formed centroids
    """
    if raw_centroids is None:
        raw_centroids = artifact.centroids

    dimensions = len(artifact.vocabulary)
    centroids = {}
    for label, vector in raw_centroids.items():
        cleaned = _clean_centroid(label, vector, dimensions)
        if cleaned is not None:
            centroids[label] = cleaned

    return ModelArtifact(vocabulary=artifact.vocabulary, idf=artifact.idf, centroids=centroids)


def parse_artifact(data: Union[ModelArtifact, Dict[str, Any], str, bytes]) -> ModelArtifact:
    """
    Validate artifact data from a model, a dict, or raw JSON.

    Vocabulary and IDF must be well formed; centroids are checked one by one
    so a single bad label never costs the others.

    Raises:
        ModelArtifactError: If the data is not a well-formed artifact
    """
    if isinstance(data, ModelArtifact):
        return sanitize_artifact(data)

    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise ModelArtifactError(f"Model artifact is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ModelArtifactError(f"Model artifact must be a JSON object, got {type(data).__name__}")

    raw_centroids = data.get("centroids", {})
    if not isinstance(raw_centroids, dict):
        raise ModelArtifactError("Model artifact centroids must be an object")

    try:
        artifact = ModelArtifact.model_validate({**data, "centroids": {}})
    except ValidationError as e:
        raise ModelArtifactError(f"Malformed model artifact: {e.error_count()} validation error(s)") from e

    return sanitize_artifact(artifact, raw_centroids)


def load_artifact(path: Union[str, Path]) -> ModelArtifact:
    """
    Load and validate an artifact file.

    Raises:
        ModelArtifactError: If the file is missing or malformed
    """
    artifact_path = Path(path)
    if not artifact_path.exists():
        raise ModelArtifactError(f"Model artifact not found: {artifact_path}")

    artifact = parse_artifact(artifact_path.read_bytes())
    logger.info(
        "model_artifact_loaded",
        path=str(artifact_path),
        vocabulary_size=len(artifact.vocabulary),
        labels=list(artifact.centroids),
    )
    return artifact


def save_artifact(artifact: ModelArtifact, path: Union[str, Path], indent: Optional[int] = 2) -> Path:
    """
    Write an artifact as JSON, creating parent directories.

    Each call writes its own temporary sibling and renames it into place, so
    a reader never sees a partial artifact and concurrent writers never share
    a temporary file.

    Returns:
        Path of the written file
    """
    artifact_path = Path(path)
    artifact_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_file = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=artifact_path.parent,
        prefix=f".{artifact_path.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp_file as f:
            json.dump(artifact.model_dump(), f, ensure_ascii=False, indent=indent)
        os.replace(tmp_file.name, artifact_path)
    except Exception:
        Path(tmp_file.name).unlink(missing_ok=True)
        raise

    logger.info(
        "model_artifact_saved",
        path=str(artifact_path),
        size_kb=round(artifact_path.stat().st_size / 1024, 2),
    )
    return artifact_path
