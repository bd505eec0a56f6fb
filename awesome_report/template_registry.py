"""
Template registry for the HTML report.

Templates are read and compiled once, when the registry is loaded, and kept
for the life of the process. Files whose name starts with the partial prefix
are registered as partials and can be pulled in with
``{% include "_name" %}``; every other file becomes a page template keyed by
its name without extension.
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import arrow
from jinja2 import DictLoader, Environment, Template, select_autoescape

from .errors import TemplateLoadError


FROM_NOW = "fromNow"
DEFAULT_DATE_FORMAT = "dddd, MMMM D, YYYY h:mma"


def to_seconds(milliseconds: Optional[Union[int, float]]) -> float:
    """Convert a millisecond duration to seconds."""
    return (milliseconds or 0) / 1000


def date_format(value: Any, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """
    Format a timestamp for display.

    ``fmt`` uses arrow tokens (``YYYY-MM-DD HH:mm``). The special token
    ``fromNow`` gives a relative phrase such as "3 minutes ago".
    """
    if value is None or value == "":
        return ""
    moment = arrow.get(value)
    if fmt == FROM_NOW:
        return moment.humanize()
    return moment.format(fmt)


class TemplateRegistry:
    """Compiled page templates plus the partials and helpers they use."""

    def __init__(self, templates: Dict[str, Template], environment: Environment):
        self.templates = templates
        self.environment = environment

    @classmethod
    def load(cls, templates_dir: Union[str, Path], partial_prefix: str = "_") -> "TemplateRegistry":
        """
        Read every template file in ``templates_dir``.

        Args:
            templates_dir: Directory holding page templates and partials
            partial_prefix: Filename prefix marking a partial

        Returns:
            Loaded registry

        Raises:
            TemplateLoadError: If the directory or a template cannot be read
        """
        templates_path = Path(templates_dir)
        sources: Dict[str, str] = {}
        partials: Dict[str, str] = {}

        try:
            for path in sorted(templates_path.iterdir()):
                if path.is_dir():
                    continue
                data = path.read_text(encoding="utf-8")
                if path.name.startswith(partial_prefix):
                    partials[path.stem] = data
                else:
                    sources[path.stem] = data
        except OSError as e:
            raise TemplateLoadError(f"Unable to read templates from {templates_path}: {e}") from e

        environment = create_environment(partials)
        templates = {name: environment.from_string(source) for name, source in sources.items()}
        return cls(templates, environment)

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render page template ``name`` with ``context`` as its data."""
        try:
            template = self.templates[name]
        except KeyError:
            raise TemplateLoadError(f"No template named {name!r} was loaded") from None
        return template.render(context)


def create_environment(partials: Mapping[str, str]) -> Environment:
    environment = Environment(
        loader=DictLoader(dict(partials)),
        autoescape=select_autoescape(default_for_string=True, default=True),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    environment.filters["to_seconds"] = to_seconds
    environment.filters["date_format"] = date_format
    return environment
