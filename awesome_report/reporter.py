"""
The reporter: wires an engine runner to collection, assembly and output.

Typical use::

    context = initialize(config)        # once per process
    AwesomeReporter(runner, context)    # once per run
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config_parser import ReporterConfig
from .event_collector import CollectedRun, EventCollector
from .models import ReportDocument
from .renderer import ReportRenderer
from .report_assembler import assemble_report
from .stylesheet import compile_stylesheet
from .template_registry import TemplateRegistry


@dataclass
class ReporterContext:
    """Process-wide state built once at startup."""
    config: ReporterConfig
    registry: TemplateRegistry
    renderer: ReportRenderer


def initialize(config: Optional[ReporterConfig] = None, cwd: Optional[Path] = None) -> ReporterContext:
    """
    Compile and save the stylesheet, then load the page templates.

    Args:
        config: Reporter configuration (defaults when None)
        cwd: Directory the reports directory is created in

    Returns:
        ReporterContext shared by every reporter in this process

    Raises:
        StylesheetError: If the stylesheet cannot be compiled
        TemplateLoadError: If the templates cannot be read
    """
    config = config or ReporterConfig()
    css = compile_stylesheet(config.styles_dir, config.style_include_paths)
    registry = TemplateRegistry.load(config.templates_dir, config.partial_prefix)
    renderer = ReportRenderer(config, registry, cwd=cwd)
    renderer.save_css(css)
    return ReporterContext(config=config, registry=registry, renderer=renderer)


class AwesomeReporter:
    """Builds and saves the report when ``runner`` signals the end of the run."""

    def __init__(self, runner, context: ReporterContext):
        self.runner = runner
        self.context = context
        self.document: Optional[ReportDocument] = None
        self.collector = EventCollector(runner, self.on_run_complete)

    def on_run_complete(self, run: CollectedRun) -> None:
        cwd = self.context.renderer.cwd
        self.document = assemble_report(
            run,
            self.context.config,
            cwd=str(cwd) if cwd else None,
        )
        self.context.renderer.save_report(self.document)
