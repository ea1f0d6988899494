"""
Data models for the offline training pipeline.

A training corpus is a JSON array of loosely structured records; these models
describe a single record and the statistics reported while training.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class TrainingRecord(BaseModel):
    """
    A single labeled email from the training corpus.

    The message text may arrive as either ``text`` or ``body``. A record with
    neither text nor subject carries no signal and is skipped by the pipeline.
    """

    text: Optional[str] = Field(default=None, description="Message text")
    body: Optional[str] = Field(default=None, description="Alias of text used by mail exports")
    subject: Optional[str] = Field(default=None, description="Subject line")
    sender: Optional[str] = Field(default=None, description="Sender address or display name")
    label: Optional[str] = Field(default=None, description="Category label (open string)")

    model_config = {"extra": "ignore"}

    @property
    def content(self) -> str:
        """Message text, preferring ``text`` over ``body``."""
        return self.text or self.body or ""

    @property
    def is_valid(self) -> bool:
        """True when the record has text or a subject."""
        return bool(self.content or self.subject)


class CorpusStats(BaseModel):
    """Record counts produced while parsing a corpus."""

    total: int = Field(default=0, ge=0)
    valid: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)


class TrainingStats(BaseModel):
    """Summary of an offline training run."""

    documents: int = Field(description="Valid documents used for vocabulary and IDF", ge=0)
    skipped: int = Field(default=0, description="Records skipped as invalid", ge=0)
    vocabulary_size: int = Field(ge=0)
    min_doc_freq: int = Field(description="Pruning threshold that was applied", ge=1)
    categories: List[str] = Field(default_factory=list)
    processing_time_ms: float = Field(default=0.0, ge=0.0)
