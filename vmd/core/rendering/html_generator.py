"""
HTML Generator
==============

Wrap rendered Markdown (or pass-through HTML) in the preview page with its
main, extra and highlight stylesheets.
"""

from typing import Any, Dict, Optional, Tuple
from pathlib import Path
import jinja2
from abc import ABC, abstractmethod

from vmd.config.logging import get_logger
from vmd.core.markdown.renderer import render_markdown
from vmd.core.rendering.styles import StylesheetError, extra_style, highlight_style, main_style
from vmd.models.schemas import DocumentSource, PageOptions, RenderOptions, RenderResult

logger = get_logger(__name__)


class PageGenerationError(Exception):
    """Exception raised when preview page generation fails."""

    pass


class BasePageGenerator(ABC):
    """Abstract base class for page generators."""

    @abstractmethod
    async def generate(self, body_html: str, page: PageOptions, is_html: bool = False) -> str:
        """Generate a preview page around an HTML body."""
        pass


class Jinja2PageGenerator(BasePageGenerator):
    """Jinja2-based page generator implementation."""

    template_name = "page.html"

    def __init__(self) -> None:
        self.logger: Any = logger.bind(generator="jinja2")  # structlog.BoundLoggerBase
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Setup Jinja2 template environment."""
        template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
            enable_async=True,
        )

    async def generate(self, body_html: str, page: PageOptions, is_html: bool = False) -> str:
        """
        Generate the preview page using the Jinja2 template.

        Args:
            body_html: Rendered document body
            page: Page options
            is_html: Whether the body came from an HTML document

        Returns:
            Complete HTML page

        Raises:
            PageGenerationError: If page generation fails
        """
        try:
            self.logger.info("Generating preview page", title=page.title)

            template = self.env.get_template(self.template_name)
            context = self._prepare_context(body_html, page, is_html)
            html = await template.render_async(**context)

            self.logger.info("Preview page completed", html_length=len(html))
            return html

        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("Page generation failed", error=error_msg)
            raise PageGenerationError(error_msg) from e
        except StylesheetError as e:
            self.logger.error("Page generation failed", error=str(e))
            raise PageGenerationError(str(e)) from e

    def _prepare_context(self, body_html: str, page: PageOptions, is_html: bool) -> Dict[str, Any]:
        """
        Prepare template rendering context.

        Args:
            body_html: Rendered document body
            page: Page options
            is_html: Whether the body came from an HTML document

        Returns:
            Template context dictionary
        """
        return {
            "title": page.title,
            "base_url": page.base_url,
            "body": body_html,
            "is_html": is_html,
            "main_style": main_style(page.main_stylesheet),
            "extra_style": extra_style(page.extra_stylesheet),
            "highlight_style": highlight_style(page.highlight_stylesheet, page.highlight_theme),
        }


async def render_document_page(
    source: DocumentSource,
    options: Optional[RenderOptions] = None,
    page: Optional[PageOptions] = None,
) -> Tuple[str, Optional[RenderResult]]:
    """
    Render a loaded document into a complete preview page.

    HTML documents are placed in the page as they are. Markdown documents go
    through the rendering pipeline first.

    Args:
        source: Loaded document
        options: Render options, defaults to the application settings
        page: Page options, defaults to the application settings

    Returns:
        Tuple of the page HTML and the render result (None for HTML documents)
    """
    if page is None:
        page = PageOptions.from_settings(base_url=source.base_url)
    elif page.base_url is None:
        page = page.model_copy(update={"base_url": source.base_url})

    result: Optional[RenderResult] = None
    if source.is_html:
        body = source.contents
    else:
        result = await render_markdown(source.contents, options)
        body = result.html

    generator = Jinja2PageGenerator()
    html = await generator.generate(body, page, is_html=source.is_html)
    return html, result
