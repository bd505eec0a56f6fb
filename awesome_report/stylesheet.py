"""
Stylesheet compilation for the HTML report.

The report stylesheet builds on Bootstrap's Sass sources, shipped by the
XStatic-Bootstrap-SCSS distribution. Its ``scss`` directory is always on the
import search path, so ``@import "bootstrap/grid"`` resolves without any
configuration.
"""

from importlib import metadata
from pathlib import Path
from typing import Iterable, List, Union

import sass

from .errors import StylesheetError


STYLESHEET_ENTRY = "mochawesome.scss"
FRAMEWORK_DISTRIBUTION = "XStatic-Bootstrap-SCSS"


def framework_styles_dir() -> Path:
    """
    Return the directory holding the ``bootstrap/`` Sass partials.

    Raises:
        StylesheetError: If the framework distribution is not installed
    """
    try:
        files = metadata.files(FRAMEWORK_DISTRIBUTION) or []
    except metadata.PackageNotFoundError as e:
        raise StylesheetError(f"Style framework not installed: {FRAMEWORK_DISTRIBUTION}") from e

    for path in files:
        if path.name == "_variables.scss" and path.parent.name == "bootstrap":
            return Path(path.locate()).parent.parent

    raise StylesheetError(f"No Bootstrap sources found in {FRAMEWORK_DISTRIBUTION}")


def compile_stylesheet(
    styles_dir: Union[str, Path],
    include_paths: Iterable[Union[str, Path]] = (),
    entry: str = STYLESHEET_ENTRY,
) -> str:
    """
    Compile the report stylesheet to minified CSS.

    ``@import`` directives are resolved against ``styles_dir`` first, then
    the bundled framework sources, then each of ``include_paths``.

    Raises:
        StylesheetError: If the entry file is missing or fails to compile
    """
    styles_dir = Path(styles_dir)
    entry_file = styles_dir / entry
    if not entry_file.is_file():
        raise StylesheetError(f"Stylesheet not found: {entry_file}")

    search_paths: List[str] = [str(styles_dir), str(framework_styles_dir())]
    search_paths += [str(path) for path in include_paths]
    try:
        return sass.compile(
            filename=str(entry_file),
            include_paths=search_paths,
            output_style="compressed",
        )
    except sass.CompileError as e:
        raise StylesheetError(f"Failed to compile {entry_file}: {e}") from e
