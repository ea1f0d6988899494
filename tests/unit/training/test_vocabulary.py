"""
Unit tests for vocabulary and IDF construction.
"""

import math
from collections import Counter

import pytest

from mail_vsm.models.training import TrainingRecord
from mail_vsm.training.corpus import CorpusEmptyError
from mail_vsm.training.vocabulary import (
    build_vocabulary,
    compute_idf,
    document_frequencies,
    document_tokens,
    select_min_doc_freq,
)


@pytest.mark.unit
class TestSelectMinDocFreq:
    """Tests for the size-dependent pruning threshold."""

    @pytest.mark.parametrize("size,expected", [(1, 1), (100, 1), (101, 3), (5000, 3)])
    def test_threshold(self, size, expected):
        assert select_min_doc_freq(size) == expected

    def test_overrides(self):
        assert select_min_doc_freq(11, min_doc_freq=5, large_corpus_size=10) == 5


@pytest.mark.unit
class TestDocumentTokens:
    """Tests for per-record document tokenization."""

    def test_subject_sender_text_order(self):
        record = TrainingRecord(subject="Meeting notes", sender="pm@corp.com", text="Budget attached")
        assert document_tokens(record)[:5] == ["meeting", "notes", "corp", "budget", "attached"]

    def test_body_alias_used(self):
        record = TrainingRecord(body="Quarterly budget")
        assert "quarterly" in document_tokens(record)


@pytest.mark.unit
class TestBuildVocabulary:
    """Tests for build_vocabulary."""

    def test_three_doc_terms(self, three_doc_records):
        vocabulary, idf = build_vocabulary(three_doc_records)
        for term in ["meeting", "notes", "corp", "sale", "deals", "shop", "verify", "account",
                     "security", "fake", "bank", "meeting_notes", "fake_bank"]:
            assert term in vocabulary
        assert "com" not in vocabulary
        assert set(idf) == set(vocabulary)

    def test_first_occurrence_order(self, three_doc_records):
        vocabulary, _ = build_vocabulary(three_doc_records)
        assert vocabulary[:5] == ["meeting", "notes", "corp", "meeting_notes", "notes_corp"]

    def test_idf_formula(self, three_doc_records):
        """Terms in exactly one of three documents get log10(3 / 2)."""
        _, idf = build_vocabulary(three_doc_records)
        assert idf["verify"] == pytest.approx(math.log10(3 / 2))
        assert idf["meeting"] == pytest.approx(math.log10(3 / 2))

    def test_document_frequency_counts_documents(self):
        """Repeats inside one document count once."""
        records = [
            TrainingRecord(subject="invoice invoice invoice"),
            TrainingRecord(subject="meeting"),
        ]
        _, idf = build_vocabulary(records)
        assert idf["invoice"] == pytest.approx(math.log10(2 / 2))

    def test_ubiquitous_term_negative_idf(self):
        records = [TrainingRecord(subject="weekly report") for _ in range(3)]
        _, idf = build_vocabulary(records)
        assert idf["weekly"] == pytest.approx(math.log10(3 / 4))
        assert idf["weekly"] < 0

    def test_large_corpus_pruned(self):
        """Above 100 documents, terms in fewer than 3 documents are dropped."""
        records = [TrainingRecord(subject="weekly report zebra", label="Work")]
        records += [TrainingRecord(subject="weekly report", label="Work") for _ in range(100)]
        vocabulary, _ = build_vocabulary(records)
        assert vocabulary == ["weekly", "report", "weekly_report"]

    def test_small_corpus_not_pruned(self, three_doc_records):
        """Small corpora keep singleton terms."""
        vocabulary, _ = build_vocabulary(three_doc_records)
        assert "zebra" not in vocabulary
        assert "sale" in vocabulary

    def test_min_doc_freq_override(self, three_doc_records):
        vocabulary, _ = build_vocabulary(three_doc_records, min_doc_freq=2)
        assert vocabulary == []

    def test_empty_corpus_fails(self):
        with pytest.raises(CorpusEmptyError):
            build_vocabulary([])

    def test_stability(self, sample_records):
        """Two builds on the same corpus agree exactly."""
        first = build_vocabulary(sample_records)
        second = build_vocabulary(sample_records)
        assert first == second


@pytest.mark.unit
class TestHelpers:
    """Tests for document_frequencies and compute_idf."""

    def test_document_frequencies(self):
        terms, doc_freq = document_frequencies([["a1", "b1", "a1"], ["b1", "c1"]])
        assert terms == ["a1", "b1", "c1"]
        assert doc_freq == Counter({"a1": 1, "b1": 2, "c1": 1})

    def test_compute_idf(self):
        idf = compute_idf(["invoice"], Counter({"invoice": 1}), 3)
        assert idf == {"invoice": pytest.approx(0.17609125905568124)}
