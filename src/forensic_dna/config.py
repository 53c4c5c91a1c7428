"""Configuration management for forensic-dna runs."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, asdict, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

from .exceptions import ConfigurationError
from .tree import DuplicatePolicy

CONFIG_SCHEMA_NAME = "config.schema.json"
DEFAULT_CONFIG_NAME = "default.yaml"


@dataclass
class LoggingConfig:
    """Configuration for the package logger."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class ReportConfig:
    """Configuration for written reports."""
    output_dir: str = "reports"
    write_csv: bool = True


@dataclass
class AnalysisConfig:
    """Main analysis configuration."""
    run_id: str
    duplicate_policy: str = DuplicatePolicy.REPLACE.value
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    @property
    def policy(self) -> DuplicatePolicy:
        return DuplicatePolicy(self.duplicate_policy)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def config_hash(self) -> str:
        """Compute deterministic hash of configuration."""
        config_str = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]


def _load_schema() -> Dict[str, Any]:
    schema_file = resources.files("forensic_dna.assets.schemas") / CONFIG_SCHEMA_NAME
    return json.loads(schema_file.read_text(encoding="utf-8"))


def validate_config(data: Any) -> None:
    """Validate raw configuration data against the packaged JSON schema.

    Raises:
        ConfigurationError: If the data does not conform.
    """
    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ConfigurationError(
            f"Invalid configuration at {location}: {exc.message}",
            {"path": location, "validator": exc.validator},
        ) from exc


def config_from_dict(data: Dict[str, Any]) -> AnalysisConfig:
    validate_config(data)
    return AnalysisConfig(
        run_id=data["run_id"],
        duplicate_policy=data.get("duplicate_policy", DuplicatePolicy.REPLACE.value),
        logging=LoggingConfig(**data.get("logging", {})),
        report=ReportConfig(**data.get("report", {})),
    )


def load_config(path: str | Path) -> AnalysisConfig:
    """Load configuration from YAML file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse {path}: {exc}", {"path": str(path)}) from exc
    return config_from_dict(data)


def load_default_config() -> AnalysisConfig:
    """Load the configuration shipped with the package."""
    resource = resources.files("forensic_dna.assets.configs") / DEFAULT_CONFIG_NAME
    with resources.as_file(resource) as config_path:
        return load_config(config_path)


def dump_config(config: AnalysisConfig, path: str | Path) -> None:
    """Save configuration to YAML file."""
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False)
