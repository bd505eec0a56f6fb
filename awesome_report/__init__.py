"""
awesome-report: JSON and HTML reports for test runs.
"""

from .config_parser import ReporterConfig, parse_config, discover_config
from .errors import ReportError, ConfigError, StylesheetError, TemplateLoadError
from .event_collector import CollectedRun, EventCollector
from .models import CleanSuite, CleanTestResult, ReportDocument, ReportStats
from .report_assembler import assemble_report
from .reporter import AwesomeReporter, ReporterContext, initialize

__version__ = "1.0.0"

__all__ = [
    "AwesomeReporter",
    "CleanSuite",
    "CleanTestResult",
    "CollectedRun",
    "ConfigError",
    "EventCollector",
    "ReportDocument",
    "ReportError",
    "ReportStats",
    "ReporterConfig",
    "ReporterContext",
    "StylesheetError",
    "TemplateLoadError",
    "assemble_report",
    "discover_config",
    "initialize",
    "parse_config",
]
