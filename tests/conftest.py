"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Training corpora and records
- Trained model artifacts and services
- Temporary model files
"""

import json
import os

import pytest

from mail_vsm.classification.service import VSMClassifierService
from mail_vsm.models.artifact import ModelArtifact
from mail_vsm.models.training import TrainingRecord
from mail_vsm.training.pipeline import train_model
from tests.fixtures.corpus import SAMPLE_CORPUS, THREE_DOC_CORPUS


@pytest.fixture
def three_doc_records():
    """One record per label: Work, Promotion, Phishing."""
    return [TrainingRecord.model_validate(item) for item in THREE_DOC_CORPUS]


@pytest.fixture
def sample_records():
    """Multi-label corpus records."""
    return [TrainingRecord.model_validate(item) for item in SAMPLE_CORPUS]


@pytest.fixture
def three_doc_artifact(three_doc_records) -> ModelArtifact:
    """Artifact trained on the three-document corpus."""
    return train_model(three_doc_records).artifact


@pytest.fixture
def sample_artifact(sample_records) -> ModelArtifact:
    """Artifact trained on the sample corpus."""
    return train_model(sample_records).artifact


@pytest.fixture
def trained_service(sample_artifact) -> VSMClassifierService:
    """Service with the sample artifact resident."""
    service = VSMClassifierService(persist_learned=False)
    service.load_model(sample_artifact)
    yield service
    service.shutdown()


@pytest.fixture
def tiny_artifact() -> ModelArtifact:
    """
    Hand-built four-term artifact with unit IDF.

    Work's centroid lies on the meeting/agenda axes; discount/offer are free
    for learning tests.
    """
    return ModelArtifact(
        vocabulary=["discount", "offer", "meeting", "agenda"],
        idf={"discount": 1.0, "offer": 1.0, "meeting": 1.0, "agenda": 1.0},
        centroids={"Work": [0.0, 0.0, 1.0, 1.0]},
    )


@pytest.fixture
def model_file(tmp_path, sample_artifact):
    """Sample artifact written to a temporary file."""
    path = tmp_path / "trained_model.json"
    path.write_text(json.dumps(sample_artifact.model_dump()), encoding="utf-8")
    return path


@pytest.fixture
def corpus_file(tmp_path):
    """Sample corpus written to a temporary file."""
    path = tmp_path / "training-corpus.json"
    path.write_text(json.dumps(SAMPLE_CORPUS, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """
    Configure pytest with custom markers.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (API, end-to-end)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests that may take longer to run"
    )
