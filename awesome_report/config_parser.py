"""
Configuration parser for awesome-report.

This module provides functionality to parse and validate awesome-report.yaml
files against the bundled JSON schema.
"""

import json
import yaml
from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path
from jsonschema import validate, ValidationError

from .errors import ConfigError


PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_SCHEMA_PATH = PACKAGE_DIR / "config.schema.json"
DEFAULT_TEMPLATES_DIR = PACKAGE_DIR / "templates"
CONFIG_FILENAME = "awesome-report.yaml"

# Title of the synthetic test the wrapping harness runs before any real test.
BOOTSTRAP_TEST_TITLE = "prepping tests..."


@dataclass
class ReporterConfig:
    """Complete awesome-report configuration."""
    reports_dir: str = "reports"
    json_filename: str = "reports.json"
    html_filename: str = "mochawesome.html"
    css_filename: str = "mochawesome.css"
    templates_dir: str = str(DEFAULT_TEMPLATES_DIR)
    page_template: str = "mochawesome"
    partial_prefix: str = "_"
    sentinel_title: str = BOOTSTRAP_TEST_TITLE
    bootstrap_tests: int = 1
    style_include_paths: List[str] = field(default_factory=list)

    @property
    def styles_dir(self) -> Path:
        return Path(self.templates_dir) / "styles"

    def output_dir(self, cwd: Optional[Path] = None) -> Path:
        """Directory the artifacts are written to, relative to ``cwd``."""
        return (cwd or Path.cwd()) / self.reports_dir


class ConfigParser:
    """Parser for awesome-report configuration files."""

    def __init__(self, schema_path: str = str(DEFAULT_SCHEMA_PATH)):
        """
        Initialize the configuration parser.

        Args:
            schema_path: Path to the JSON schema file
        """
        self.schema_path = schema_path
        self.schema = self._load_schema()

    def _load_schema(self) -> dict:
        """Load the JSON schema from file."""
        schema_file = Path(self.schema_path)
        if not schema_file.exists():
            raise FileNotFoundError(f"Schema file not found: {self.schema_path}")

        with open(schema_file, 'r') as f:
            return json.load(f)

    def parse(self, config_path: str) -> ReporterConfig:
        """
        Parse and validate a configuration file.

        Args:
            config_path: Path to the awesome-report.yaml file

        Returns:
            Parsed and validated ReporterConfig object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If config is malformed or doesn't match schema
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed configuration file {config_path}: {e}") from e

        # An empty file means "all defaults"
        if config_data is None:
            config_data = {}

        try:
            validate(instance=config_data, schema=self.schema)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e.message}") from e

        return self.parse_dict(config_data, base_dir=config_file.resolve().parent)

    def parse_dict(self, config_data: dict, base_dir: Optional[Path] = None) -> ReporterConfig:
        """Convert validated config data into a ReporterConfig object.

        Relative template and style directories are resolved against
        ``base_dir`` (the directory holding the config file).
        """
        config = ReporterConfig(**config_data)

        if base_dir is not None:
            config.templates_dir = str(base_dir / config.templates_dir)
            config.style_include_paths = [
                str(base_dir / path) for path in config.style_include_paths
            ]

        return config


def parse_config(config_path: str, schema_path: str = str(DEFAULT_SCHEMA_PATH)) -> ReporterConfig:
    """
    Convenience function to parse a configuration file.

    Args:
        config_path: Path to the awesome-report.yaml file
        schema_path: Path to the JSON schema file

    Returns:
        Parsed and validated ReporterConfig object
    """
    parser = ConfigParser(schema_path=schema_path)
    return parser.parse(config_path)


def discover_config(search_dir: Path) -> ReporterConfig:
    """Load ``awesome-report.yaml`` from ``search_dir``, or defaults when absent."""
    config_path = Path(search_dir) / CONFIG_FILENAME
    if not config_path.exists():
        return ReporterConfig()
    return parse_config(str(config_path))
