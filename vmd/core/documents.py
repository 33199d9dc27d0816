"""
Documents
=========

Load Markdown and HTML documents for previewing.
"""

from typing import Optional, Union
from pathlib import Path
import re

from vmd.config.logging import get_logger
from vmd.models.schemas import DocumentSource

logger = get_logger(__name__)

HTML_PATH_PATTERN = re.compile(r"\.html?$")


class DocumentNotFoundError(Exception):
    """Exception raised when a document file does not exist."""

    pass


class DocumentAccessError(Exception):
    """Exception raised when a document path is outside the allowed root."""

    pass


class DocumentDecodeError(Exception):
    """Exception raised when a document is not valid UTF-8."""

    pass


def is_html_path(file_path: Optional[Union[str, Path]]) -> bool:
    """Check whether a path names an HTML document."""
    return bool(file_path) and HTML_PATH_PATTERN.search(str(file_path)) is not None


def base_url_for(directory: Path) -> str:
    """File URI of a directory, with a trailing slash."""
    uri = directory.resolve().as_uri()
    return uri if uri.endswith("/") else f"{uri}/"


def load_document(
    file_path: Optional[Union[str, Path]] = None,
    contents: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> DocumentSource:
    """
    Load a document from a file or from given contents.

    Args:
        file_path: Document path; takes precedence over contents
        contents: Document contents when there is no file
        cwd: Directory used for the base URL when there is no file

    Returns:
        DocumentSource with contents, HTML flag and base URL

    Raises:
        DocumentNotFoundError: If the file does not exist
        DocumentDecodeError: If the file is not valid UTF-8
    """
    if file_path is not None:
        path = Path(file_path).expanduser()
        if not path.is_file():
            logger.warning("Document not found", file_path=str(path))
            raise DocumentNotFoundError(f"Document not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Document is not valid UTF-8", file_path=str(path), error=str(e))
            raise DocumentDecodeError(f"Document is not valid UTF-8: {path}") from e
        logger.debug("Document loaded", file_path=str(path), length=len(text))
        return DocumentSource(
            file_path=path,
            contents=text,
            is_html=is_html_path(path),
            base_url=base_url_for(path.parent),
        )

    return DocumentSource(
        contents=contents or "",
        is_html=False,
        base_url=base_url_for(cwd or Path.cwd()),
    )


def window_title(
    title: Optional[str] = None,
    file_path: Optional[Union[str, Path]] = None,
    app_name: str = "vmd",
) -> str:
    """Title for a preview of the given document."""
    prefix = title or (Path(file_path).name if file_path else None)
    return f"{prefix} - {app_name}" if prefix else app_name


def resolve_within(root: Path, relative: Union[str, Path]) -> Path:
    """
    Resolve a user supplied path against a root directory.

    Args:
        root: Directory documents must live under
        relative: Path relative to root

    Returns:
        Resolved absolute path

    Raises:
        DocumentAccessError: If the path escapes root
    """
    base = Path(root).resolve()
    resolved = (base / relative).resolve()
    if resolved != base and base not in resolved.parents:
        logger.warning("Rejected document path", root=str(base), path=str(relative))
        raise DocumentAccessError(f"Path is outside the documents root: {relative}")
    return resolved
