"""
Model artifact shared by the offline trainer and the runtime service.

Serialized as::

    {
      "vocabulary": ["term", ...],
      "idf": {"term": 0.47, ...},
      "centroids": {"Work": [0.0, 0.01, ...], ...}
    }

The vocabulary order defines vector dimensions; every centroid has one entry
per vocabulary term.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


class ModelArtifact(BaseModel):
    """Vocabulary, IDF table and per-label centroids."""

    vocabulary: List[str] = Field(description="Ordered terms; index = vector dimension")
    idf: Dict[str, float] = Field(default_factory=dict, description="Inverse document frequency per term")
    centroids: Dict[str, List[float]] = Field(
        default_factory=dict, description="Per-label centroid vectors"
    )

    model_config = {"extra": "ignore"}

    @property
    def dimensions(self) -> int:
        return len(self.vocabulary)
