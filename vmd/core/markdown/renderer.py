"""
Markdown Renderer
=================

Core rendering pipeline converting Markdown into HTML fragments.
markdown-it-py builds the token tree, then a fixed sequence of tree
transformers runs before HTML serialization:

1. unicode emoji to :shortcodes:
2. heading slugs, then :shortcodes: to emoji images
3. checklist item styling
4. code block classes
5. front matter rendering

Code blocks are highlighted with Pygments during serialization and raw
HTML is passed through untouched.
"""

from typing import Any, Dict, Optional
import time
from abc import ABC, abstractmethod

from markdown_it import MarkdownIt

from vmd.config.logging import get_logger
from vmd.core.markdown.checklists import checklist_plugin
from vmd.core.markdown.code_blocks import code_class_plugin, highlight_code
from vmd.core.markdown.emoji import emoji_names, emoji_plugin
from vmd.core.markdown.frontmatter import front_matter_plugin
from vmd.core.markdown.slugs import collect_headings, slug_plugin
from vmd.models.schemas import RenderOptions, RenderResult

logger = get_logger(__name__)


class MarkdownRenderError(Exception):
    """Exception raised when Markdown rendering fails."""

    pass


class BaseMarkdownRenderer(ABC):
    """Abstract base class for Markdown renderers."""

    @abstractmethod
    async def render(self, text: str, options: RenderOptions) -> RenderResult:
        """Render Markdown text into an HTML fragment."""
        pass


def build_markdown_it(options: RenderOptions) -> MarkdownIt:
    """
    Create a configured markdown-it parser for the given options.

    Args:
        options: Render options

    Returns:
        MarkdownIt instance with all transformers registered in order
    """
    md = MarkdownIt("gfm-like", {"html": True, "highlight": highlight_code})

    md.use(slug_plugin)
    md.use(emoji_plugin, image_dir=options.emoji_image_dir, url_template=options.emoji_url_template)
    md.use(checklist_plugin)
    md.use(code_class_plugin)
    md.use(front_matter_plugin, formats=options.frontmatter_formats, mode=options.frontmatter_renderer)

    return md


class MarkdownItRenderer(BaseMarkdownRenderer):
    """markdown-it-py based renderer implementation."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(renderer="markdown-it")  # structlog.BoundLoggerBase

    async def render(self, text: str, options: RenderOptions) -> RenderResult:
        """
        Render Markdown text through the transformer pipeline.

        Args:
            text: Markdown source
            options: Render options

        Returns:
            RenderResult with the HTML fragment and collected metadata

        Raises:
            MarkdownRenderError: If rendering fails unexpectedly
        """
        start_time = time.time()

        try:
            self.logger.info("Rendering Markdown", content_length=len(text))

            md = build_markdown_it(options)
            env: Dict[str, Any] = {}
            tokens = md.parse(text, env)
            html = md.renderer.render(tokens, md.options, env)

            result = RenderResult(
                html=html,
                front_matter=env.get("front_matter"),
                headings=collect_headings(tokens),
                emoji=emoji_names(env),
                processing_time=time.time() - start_time,
            )

            self.logger.info(
                "Markdown rendering completed",
                html_length=len(html),
                headings=len(result.headings),
                front_matter=result.front_matter.format.value if result.front_matter else None,
            )
            return result

        except Exception as e:
            error_msg = f"Unexpected Markdown rendering error: {e}"
            self.logger.error("Markdown rendering failed", error=error_msg)
            raise MarkdownRenderError(error_msg) from e


async def render_markdown(text: str, options: Optional[RenderOptions] = None) -> RenderResult:
    """
    Render Markdown text into an HTML fragment.

    Args:
        text: Markdown source
        options: Render options, defaults to the application settings

    Returns:
        RenderResult with the HTML fragment and collected metadata
    """
    if options is None:
        options = RenderOptions.from_settings()

    renderer = MarkdownItRenderer()
    return await renderer.render(text, options)
