"""
Exceptions raised by awesome-report.

Everything here aborts reporter startup. Failures while writing report
artifacts are reported on the console instead of raised.
"""


class ReportError(Exception):
    """Base exception for reporter setup failures."""
    pass


class ConfigError(ReportError):
    """Exception raised when the reporter configuration is invalid."""
    pass


class StylesheetError(ReportError):
    """Exception raised when the report stylesheet cannot be compiled."""
    pass


class TemplateLoadError(ReportError):
    """Exception raised when the template directory cannot be loaded."""
    pass
