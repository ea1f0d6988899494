"""
Unit tests for the offline training pipeline.
"""

import numpy as np
import pytest

from mail_vsm.models.training import TrainingRecord
from mail_vsm.training.corpus import CorpusEmptyError, CorpusError
from mail_vsm.training.pipeline import compute_label_centroids, train_from_file, train_model
from mail_vsm.vsm.vectorizer import VectorSpace
from tests.fixtures.corpus import CORPUS_WITH_INVALID, SAMPLE_CORPUS


@pytest.mark.unit
class TestTrainModel:
    """Tests for train_model."""

    def test_one_centroid_per_label(self, three_doc_records):
        outcome = train_model(three_doc_records)
        artifact = outcome.artifact
        assert set(artifact.centroids) == {"Work", "Promotion", "Phishing"}
        for vector in artifact.centroids.values():
            assert len(vector) == len(artifact.vocabulary)

    def test_stats(self, sample_records):
        outcome = train_model(sample_records, skipped=2)
        stats = outcome.stats
        assert stats.documents == len(SAMPLE_CORPUS)
        assert stats.skipped == 2
        assert stats.vocabulary_size == len(outcome.artifact.vocabulary)
        assert stats.min_doc_freq == 1
        assert stats.categories == ["Work", "Promotion", "Phishing", "Education"]

    def test_centroid_is_mean_of_label_vectors(self, sample_records):
        artifact = train_model(sample_records).artifact
        space = VectorSpace.from_terms(artifact.vocabulary, artifact.idf)
        work = [r for r in sample_records if r.label == "Work"]
        expected = np.mean(
            [space.vectorize(r.content, r.subject, r.sender) for r in work], axis=0
        )
        np.testing.assert_allclose(artifact.centroids["Work"], expected)

    def test_unlabeled_records_feed_vocabulary_only(self):
        records = [
            TrainingRecord(subject="Meeting notes", label="Work"),
            TrainingRecord(subject="Garden party"),
        ]
        artifact = train_model(records).artifact
        assert "garden" in artifact.vocabulary
        assert list(artifact.centroids) == ["Work"]

    def test_empty_fails(self):
        with pytest.raises(CorpusEmptyError):
            train_model([])

    def test_deterministic(self, sample_records):
        assert train_model(sample_records).artifact == train_model(sample_records).artifact


@pytest.mark.unit
class TestComputeLabelCentroids:
    """Tests for compute_label_centroids."""

    def test_groups_by_label(self):
        space = VectorSpace.from_terms(["invoice", "meeting"], {"invoice": 1.0, "meeting": 1.0})
        records = [
            TrainingRecord(subject="invoice", label="Work"),
            TrainingRecord(subject="meeting", label="Work"),
            TrainingRecord(subject="invoice", label="Promotion"),
        ]
        centroids = compute_label_centroids(space, records)
        np.testing.assert_allclose(centroids["Work"], [0.5, 0.5])
        np.testing.assert_allclose(centroids["Promotion"], [1.0, 0.0])


@pytest.mark.unit
class TestTrainFromFile:
    """Tests for train_from_file."""

    def test_skipped_records_reported(self, tmp_path):
        import json

        path = tmp_path / "corpus.json"
        path.write_text(json.dumps(CORPUS_WITH_INVALID, ensure_ascii=False), encoding="utf-8")
        outcome = train_from_file(path)
        assert outcome.stats.documents == len(SAMPLE_CORPUS)
        assert outcome.stats.skipped == 5

    def test_all_invalid_fails(self, tmp_path):
        path = tmp_path / "corpus.json"
        path.write_text('[{"sender": "a@b.com"}, null]', encoding="utf-8")
        with pytest.raises(CorpusEmptyError):
            train_from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CorpusError):
            train_from_file(tmp_path / "nope.json")
