"""
Render Routes
=============

FastAPI routes for Markdown rendering and preview pages.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from vmd.config.logging import get_logger
from vmd.config.settings import get_settings
from vmd.core.documents import (
    base_url_for,
    is_html_path,
    load_document,
    resolve_within,
    window_title,
)
from vmd.core.markdown.renderer import render_markdown
from vmd.core.rendering.html_generator import render_document_page
from vmd.models.schemas import (
    DocumentSource,
    MarkdownRenderRequest,
    PageOptions,
    PreviewRequest,
    RenderOptions,
    RenderResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Rendering"])


def _render_options(options: Optional[RenderOptions]) -> RenderOptions:
    """Request options, with the emoji image directory taken from settings only."""
    if options is None:
        return RenderOptions.from_settings()
    return options.model_copy(update={"emoji_image_dir": get_settings().emoji_image_dir})


@router.post("/render", response_model=RenderResponse)
async def render_fragment(request: MarkdownRenderRequest) -> RenderResponse:
    """
    Render Markdown to an HTML fragment.

    Rendering failures propagate as MarkdownRenderError and are reported by
    the application's error handler.
    """
    start_time = datetime.now(timezone.utc)
    logger.info("Render requested", content_length=len(request.content))

    result = await render_markdown(request.content, _render_options(request.options))

    processing_time = (datetime.now(timezone.utc) - start_time).total_seconds()
    return RenderResponse(
        success=True, result=result, error=None, processing_time=processing_time
    )


@router.post("/preview", response_class=HTMLResponse)
async def preview_contents(request: PreviewRequest) -> HTMLResponse:
    """Render posted document contents into a preview page."""
    settings = get_settings()
    logger.info(
        "Preview requested", content_length=len(request.content), file_name=request.file_name
    )

    base_url = base_url_for(settings.documents_root)
    source = DocumentSource(
        contents=request.content,
        is_html=is_html_path(request.file_name),
        base_url=base_url,
    )
    page = PageOptions.from_settings(
        title=window_title(request.title, request.file_name, settings.app_name),
        highlight_theme=request.highlight_theme,
        base_url=base_url,
    )

    html, _ = await render_document_page(source, _render_options(request.options), page)
    return HTMLResponse(content=html)


@router.get("/preview/file", response_class=HTMLResponse)
async def preview_file(
    path: str = Query(..., description="Document path relative to the documents root"),
    title: Optional[str] = Query(None, description="Page title prefix"),
) -> HTMLResponse:
    """Render a document under the documents root into a preview page."""
    settings = get_settings()
    file_path = resolve_within(settings.documents_root, path)
    logger.info("File preview requested", file_path=str(file_path))

    source = load_document(file_path=file_path)
    page = PageOptions.from_settings(
        title=window_title(title, file_path, settings.app_name),
        base_url=source.base_url,
    )

    html, _ = await render_document_page(source, RenderOptions.from_settings(), page)
    return HTMLResponse(content=html)
