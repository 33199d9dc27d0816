"""
Stylesheets
===========

Load page stylesheets and highlight themes.
"""

from typing import Optional
from pathlib import Path

from vmd.config.logging import get_logger
from vmd.core.markdown.code_blocks import highlight_stylesheet

logger = get_logger(__name__)

ASSETS_DIR = Path(__file__).parent / "assets"
DEFAULT_MAIN_STYLESHEET = ASSETS_DIR / "github-markdown.css"


class StylesheetError(Exception):
    """Exception raised when a stylesheet cannot be read."""

    pass


def get_stylesheet(path: Path) -> str:
    """
    Read a stylesheet file.

    Args:
        path: Stylesheet path

    Returns:
        Stylesheet contents

    Raises:
        StylesheetError: If the file cannot be read
    """
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to read stylesheet", path=str(path), error=str(e))
        raise StylesheetError(f"Cannot read stylesheet {path}: {e}") from e


def get_highlight_theme(name: str) -> str:
    """Get the CSS for a named highlight theme."""
    return highlight_stylesheet(name)


def main_style(path: Optional[Path]) -> str:
    """Main stylesheet, falling back to the bundled GitHub style."""
    return get_stylesheet(path or DEFAULT_MAIN_STYLESHEET)


def extra_style(path: Optional[Path]) -> str:
    """Optional extra stylesheet."""
    return get_stylesheet(path) if path else ""


def highlight_style(path: Optional[Path], theme: str) -> str:
    """Highlight stylesheet, or the default theme overlaid by the selected one."""
    if path:
        return get_stylesheet(path)
    return f"{get_highlight_theme('default')}\n{get_highlight_theme(theme)}"
