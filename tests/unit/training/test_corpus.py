"""
Unit tests for corpus loading and record validation.
"""

import json

import pytest

from mail_vsm.models.training import TrainingRecord
from mail_vsm.training.corpus import CorpusEmptyError, CorpusError, load_corpus, parse_corpus
from tests.fixtures.corpus import CORPUS_WITH_INVALID, SAMPLE_CORPUS


@pytest.mark.unit
class TestTrainingRecord:
    """Tests for TrainingRecord validity rules."""

    def test_body_alias(self):
        record = TrainingRecord(body="Quarterly budget attached", label="Work")
        assert record.content == "Quarterly budget attached"
        assert record.is_valid

    def test_text_preferred_over_body(self):
        record = TrainingRecord(text="from text", body="from body")
        assert record.content == "from text"

    def test_subject_only_is_valid(self):
        assert TrainingRecord(subject="Meeting notes").is_valid

    def test_sender_only_is_invalid(self):
        assert not TrainingRecord(sender="pm@corp.com", label="Work").is_valid

    def test_empty_strings_invalid(self):
        assert not TrainingRecord(subject="", text="", label="Spam").is_valid


@pytest.mark.unit
class TestParseCorpus:
    """Tests for parse_corpus."""

    def test_all_valid(self):
        records, stats = parse_corpus(SAMPLE_CORPUS)
        assert len(records) == len(SAMPLE_CORPUS)
        assert stats.valid == len(SAMPLE_CORPUS)
        assert stats.skipped == 0

    def test_invalid_records_skipped_and_counted(self):
        """Invalid records are skipped, never fatal."""
        records, stats = parse_corpus(CORPUS_WITH_INVALID)
        assert stats.total == len(CORPUS_WITH_INVALID)
        assert stats.valid == len(SAMPLE_CORPUS)
        assert stats.skipped == 5
        assert [r.subject for r in records] == [item["subject"] for item in SAMPLE_CORPUS]

    def test_wrongly_typed_field_skipped(self):
        records, stats = parse_corpus([{"subject": 123, "label": "Work"}])
        assert records == []
        assert stats.skipped == 1

    def test_unknown_fields_ignored(self):
        records, _ = parse_corpus([{"subject": "Hello team", "label": "Work", "id": "abc"}])
        assert records[0].subject == "Hello team"

    def test_empty(self):
        records, stats = parse_corpus([])
        assert records == []
        assert stats.total == 0


@pytest.mark.unit
class TestLoadCorpus:
    """Tests for load_corpus."""

    def test_loads_array(self, corpus_file):
        raw = load_corpus(corpus_file)
        assert len(raw) == len(SAMPLE_CORPUS)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CorpusError, match="not found"):
            load_corpus(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(CorpusError, match="not valid JSON"):
            load_corpus(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"subject": "hi"}), encoding="utf-8")
        with pytest.raises(CorpusError, match="JSON array"):
            load_corpus(path)

    def test_empty_error_is_corpus_error(self):
        assert issubclass(CorpusEmptyError, CorpusError)
