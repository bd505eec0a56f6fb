"""
Writes report artifacts to the reports directory.

Each artifact is written independently: a failure to create the directory
or write one file is printed and the remaining artifacts are still
attempted.
"""

import json
from pathlib import Path
from typing import Optional

from .config_parser import ReporterConfig
from .models import ReportDocument
from .template_registry import TemplateRegistry


class ReportRenderer:
    """Serializes a ReportDocument to JSON and HTML, and saves the stylesheet."""

    def __init__(
        self,
        config: ReporterConfig,
        registry: TemplateRegistry,
        cwd: Optional[Path] = None,
    ):
        """
        Initialize the renderer.

        Args:
            config: Reporter configuration
            registry: Loaded page templates
            cwd: Directory the reports directory is created in (defaults to
                the working directory at write time)
        """
        self.config = config
        self.registry = registry
        self.cwd = Path(cwd) if cwd else None

    @property
    def reports_dir(self) -> Path:
        return self.config.output_dir(self.cwd)

    @property
    def json_file(self) -> Path:
        return self.reports_dir / self.config.json_filename

    @property
    def html_file(self) -> Path:
        return self.reports_dir / self.config.html_filename

    @property
    def css_file(self) -> Path:
        return self.reports_dir / self.config.css_filename

    def to_json(self, document: ReportDocument) -> str:
        return json.dumps(document.to_dict(), indent=2)

    def to_html(self, document: ReportDocument) -> str:
        return self.registry.render(self.config.page_template, document.to_dict())

    def save_json(self, document: ReportDocument) -> Optional[Path]:
        return self.save_to_file(self.json_file, self.to_json(document))

    def save_html(self, document: ReportDocument) -> Optional[Path]:
        saved = self.save_to_file(self.html_file, self.to_html(document))
        if saved:
            print(f"\nopen {self._display_path(saved)}\n")
        return saved

    def save_css(self, css: str) -> Optional[Path]:
        return self.save_to_file(self.css_file, css)

    def save_report(self, document: ReportDocument) -> None:
        """Write the JSON and HTML artifacts for ``document``."""
        self.save_json(document)
        self.save_html(document)

    def save_to_file(self, out_file: Path, out_data: str) -> Optional[Path]:
        """
        Write ``out_data`` to ``out_file``, creating the reports directory.

        Returns:
            The written path, or None when the write failed
        """
        try:
            out_file.parent.mkdir(parents=True, exist_ok=True)
            with open(out_file, 'w', encoding='utf-8') as f:
                f.write(out_data)
        except OSError as e:
            print(f"\nError: Unable to save {out_file}\n{e}")
            return None

        print(f"Saved {out_file}")
        return out_file

    def _display_path(self, path: Path) -> str:
        base = self.cwd or Path.cwd()
        try:
            return str(path.relative_to(base))
        except ValueError:
            return str(path)
