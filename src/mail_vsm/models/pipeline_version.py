"""
Pipeline version model for deterministic processing.

Tracks the component versions that shape the vector space so that the same
versions plus the same input always produce the same vectors.
"""

from pydantic import BaseModel, Field


class PipelineVersion(BaseModel):
    """
    Immutable version contract for the classifier pipeline.
    """

    tokenizer_version: str = Field(
        description="Tokenizer version", examples=["vsm-tokenizer-1.0.0"]
    )
    stoplist_version: str = Field(
        description="Stop-word list version", examples=["stopwords-en-vi-html-2025.1"]
    )
    vectorizer_version: str = Field(
        description="Field-weighted TF-IDF vectorizer version",
        examples=["field-weighted-tfidf-1.0.0"],
    )
    artifact_format_version: str = Field(
        description="Model artifact JSON format", examples=["vsm-artifact-1"]
    )
    learner_version: str = Field(
        description="Incremental centroid learner version", examples=["ema-centroid-1.0.0"]
    )

    model_config = {"frozen": True}

    def to_repr(self) -> str:
        """
        Short representation for logging.

        Returns:
            Compact string with the components that affect vector geometry.
        """
        return f"Pipeline-{self.tokenizer_version}-{self.vectorizer_version}"
