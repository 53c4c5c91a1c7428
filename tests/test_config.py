"""
Tests for configuration loading and validation.
"""

import pytest
import yaml

from forensic_dna.config import (
    AnalysisConfig,
    config_from_dict,
    dump_config,
    load_config,
    load_default_config,
    validate_config,
)
from forensic_dna.exceptions import ConfigurationError
from forensic_dna.tree import DuplicatePolicy


class TestAnalysisConfig:
    """Test configuration loading."""

    def setup_method(self):
        """Setup test fixtures."""
        self.valid_config = {
            "run_id": "case_42",
            "duplicate_policy": "reject",
            "logging": {"level": "DEBUG", "log_file": None},
            "report": {"output_dir": "out", "write_csv": False},
        }

    def test_default_config(self):
        config = load_default_config()
        assert config.run_id == "default"
        assert config.policy is DuplicatePolicy.REPLACE
        assert config.logging.level == "INFO"
        assert config.report.write_csv is True

    def test_from_dict(self):
        config = config_from_dict(self.valid_config)
        assert config.policy is DuplicatePolicy.REJECT
        assert config.logging.level == "DEBUG"
        assert config.report.output_dir == "out"

    def test_optional_sections_default(self):
        config = config_from_dict({"run_id": "minimal"})
        assert config.duplicate_policy == "replace"
        assert config.report.output_dir == "reports"

    def test_dump_and_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = config_from_dict(self.valid_config)
        dump_config(config, path)
        assert load_config(path) == config

    def test_config_hash_is_stable(self):
        first = config_from_dict(self.valid_config)
        second = config_from_dict(dict(self.valid_config))
        assert len(first.config_hash()) == 16
        assert first.config_hash() == second.config_hash()
        assert first.config_hash() != AnalysisConfig(run_id="other").config_hash()


class TestConfigValidation:
    """Test schema validation errors."""

    def test_missing_run_id(self):
        with pytest.raises(ConfigurationError, match="run_id"):
            validate_config({"duplicate_policy": "replace"})

    def test_unknown_policy(self):
        with pytest.raises(ConfigurationError) as excinfo:
            config_from_dict({"run_id": "x", "duplicate_policy": "merge"})
        assert excinfo.value.details["path"] == "duplicate_policy"

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            validate_config({"run_id": "x", "seed": 7})

    def test_nested_error_location(self):
        with pytest.raises(ConfigurationError, match="logging.level"):
            validate_config({"run_id": "x", "logging": {"level": "LOUD"}})

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_unparseable_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("run_id: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Could not parse"):
            load_config(path)

    def test_written_yaml_is_plain(self, tmp_path):
        path = tmp_path / "config.yaml"
        dump_config(AnalysisConfig(run_id="plain"), path)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["run_id"] == "plain"
        assert data["logging"] == {"level": "INFO", "log_file": None}
