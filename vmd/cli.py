#!/usr/bin/env python3
"""
Command Line Interface
======================

Render Markdown documents to HTML or run the preview service.

Usage:
    vmd render README.md -o readme.html
    vmd render notes.md --fragment --frontmatter-renderer code
    vmd serve --port 8080
"""

from typing import Any, Dict, List, Optional
import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from vmd import __version__
from vmd.config.logging import get_logger
from vmd.config.settings import get_settings
from vmd.core.documents import (
    DocumentDecodeError,
    DocumentNotFoundError,
    load_document,
    window_title,
)
from vmd.core.markdown.renderer import MarkdownRenderError, render_markdown
from vmd.core.rendering.html_generator import PageGenerationError, render_document_page
from vmd.models.schemas import PageOptions, RenderOptions

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(prog="vmd", description="Markdown preview renderer")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a document to HTML")
    render.add_argument("path", help="Document to render, or - to read from stdin")
    render.add_argument("-o", "--output", help="Output file (defaults to stdout)")
    render.add_argument(
        "--fragment", action="store_true", help="Write only the rendered HTML fragment"
    )
    render.add_argument("--title", help="Page title prefix")
    render.add_argument(
        "--frontmatter-renderer",
        choices=["none", "code", "table"],
        help="How front matter is rendered",
    )
    render.add_argument(
        "--frontmatter-formats", help="Comma separated front matter formats, e.g. yaml,toml"
    )
    render.add_argument("--highlight-theme", help="Pygments highlight theme")

    serve = subparsers.add_parser("serve", help="Run the preview HTTP service")
    serve.add_argument("--host", help="Bind host")
    serve.add_argument("--port", type=int, help="Bind port")

    return parser


def _render_options(args: argparse.Namespace) -> RenderOptions:
    values: Dict[str, Any] = RenderOptions.from_settings().model_dump()
    if args.frontmatter_renderer:
        values["frontmatter_renderer"] = args.frontmatter_renderer
    if args.frontmatter_formats:
        values["frontmatter_formats"] = args.frontmatter_formats
    return RenderOptions(**values)


async def render_command(args: argparse.Namespace) -> str:
    """
    Render the document named on the command line.

    Returns:
        Page HTML, or the fragment when --fragment is given
    """
    options = _render_options(args)

    if args.path == "-":
        source = load_document(contents=sys.stdin.read(), cwd=Path.cwd())
        file_path = None
    else:
        source = load_document(file_path=args.path)
        file_path = args.path

    if args.fragment:
        if source.is_html:
            return source.contents
        result = await render_markdown(source.contents, options)
        return result.html

    page = PageOptions.from_settings(
        title=window_title(args.title, file_path, get_settings().app_name),
        highlight_theme=args.highlight_theme,
        base_url=source.base_url,
    )
    html, _ = await render_document_page(source, options, page)
    return html


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point."""
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        from vmd.api.main import run_development_server

        run_development_server(host=args.host, port=args.port)
        return 0

    try:
        html = asyncio.run(render_command(args))
    except (DocumentNotFoundError, DocumentDecodeError) as e:
        print(f"vmd: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"vmd: invalid render options: {e}", file=sys.stderr)
        return 1
    except (MarkdownRenderError, PageGenerationError) as e:
        logger.error("Rendering failed", error=str(e))
        print(f"vmd: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(html, encoding="utf-8")
        logger.info("Output written", output=args.output, length=len(html))
    else:
        sys.stdout.write(html)

    return 0


if __name__ == "__main__":
    sys.exit(main())
