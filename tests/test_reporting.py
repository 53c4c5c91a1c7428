"""
Tests for report tables, summaries and logging output.
"""

import json

import pandas as pd

from forensic_dna.loader import build_store
from forensic_dna.logging_config import setup_logging
from forensic_dna.reporting import markers_frame, profiles_frame, summary, write_report
from forensic_dna.tree import ProfileStore


class TestReporting:
    """Test pandas tables and report artifacts."""

    def test_profiles_frame(self, database_file):
        store = build_store(database_file)
        store.flag_profiles_of_interest()
        frame = profiles_frame(store)
        assert list(frame.columns) == ["name", "n_markers", "interest_flag"]
        assert frame["name"].tolist() == ["Doe, Bob", "Smith, Amy", "Zane, Carl"]
        assert frame["n_markers"].tolist() == [2, 2, 1]
        assert frame["interest_flag"].tolist() == [False, True, False]

    def test_markers_frame(self, database_file):
        frame = markers_frame(build_store(database_file))
        assert len(frame) == 5
        smith = frame[frame["name"] == "Smith, Amy"]
        assert smith["marker"].tolist() == ["AGAT", "CC"]
        assert smith["occurrences"].tolist() == [3, 1]

    def test_empty_store_frames(self):
        store = ProfileStore()
        assert profiles_frame(store).empty
        assert list(markers_frame(store).columns) == ["name", "marker", "occurrences"]

    def test_summary(self, database_file):
        store = build_store(database_file)
        store.flag_profiles_of_interest()
        assert summary(store) == {
            "total": 3,
            "of_interest": 1,
            "unmarked": 2,
            "unmarked_names": ["Doe, Bob", "Zane, Carl"],
            "height": 2,
        }

    def test_write_report(self, database_file, tmp_path):
        store = build_store(database_file)
        artifacts = write_report(store, tmp_path / "out")
        assert set(artifacts) == {"summary", "profiles"}

        payload = json.loads(artifacts["summary"].read_text(encoding="utf-8"))
        assert payload["total"] == 3
        assert len(pd.read_csv(artifacts["profiles"])) == 3

    def test_write_report_without_csv(self, database_file, tmp_path):
        artifacts = write_report(build_store(database_file), tmp_path, write_csv=False)
        assert set(artifacts) == {"summary"}
        assert not (tmp_path / "profiles.csv").exists()


class TestLogging:
    """Test the package logger setup."""

    def test_log_file_records_bulk_operations(self, database_file, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging(level="DEBUG", log_file=log_file, console_output=False)
        store = build_store(database_file)
        store.flag_profiles_of_interest()
        store.prune_unmarked()
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "Loaded 3 profiles" in text
        assert "Flagged 1 new profiles of interest" in text
        assert "Pruned 2 unmarked profiles, 1 remain" in text
        assert "Completed flag profiles of interest" in text

    def test_level_filters_messages(self, database_file, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(level="WARNING", log_file=log_file, console_output=False)
        build_store(database_file)
        assert "Loaded" not in log_file.read_text(encoding="utf-8")

    def test_reconfiguring_replaces_handlers(self, tmp_path):
        setup_logging(log_file=tmp_path / "a.log", console_output=False)
        logger = setup_logging(log_file=tmp_path / "b.log", console_output=False)
        assert len(logger.handlers) == 1
