"""
FastAPI Application
==================

Main FastAPI application serving rendered Markdown fragments, preview pages
and emoji images.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse
import uvicorn

from vmd.api.routes.health import router as health_router
from vmd.api.routes.render import router as render_router
from vmd.config.settings import get_settings
from vmd.config.logging import get_logger
from vmd.core.documents import (
    DocumentAccessError,
    DocumentDecodeError,
    DocumentNotFoundError,
    resolve_within,
)
from vmd.core.markdown.renderer import MarkdownRenderError
from vmd.core.rendering.html_generator import PageGenerationError
from vmd.models.schemas import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "Starting vmd application",
        environment=settings.environment,
        documents_root=str(settings.documents_root.resolve()),
    )

    if settings.emoji_image_dir is not None and not settings.emoji_image_dir.is_dir():
        logger.warning(
            "Emoji image directory not found", emoji_image_dir=str(settings.emoji_image_dir)
        )

    try:
        yield
    finally:
        logger.info("Shutting down vmd application")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    error_code: str,
    exc: Exception,
) -> JSONResponse:
    """Build a structured error response and log it."""
    error_response = ErrorResponse(
        error=error,
        error_code=error_code,
        details={"message": str(exc)} if get_settings().debug else None,
        request_id=getattr(request.state, "request_id", None),
    )

    logger.error(
        "Request failed",
        error_code=error_code,
        error_message=str(exc),
        request_id=error_response.request_id,
    )

    return JSONResponse(status_code=status_code, content=error_response.model_dump(mode="json"))


# Request ID middleware
async def add_request_id(request: Request, call_next) -> JSONResponse:  # type: ignore
    """Add request ID to all requests."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)  # type: ignore
    response.headers["X-Request-ID"] = request_id  # type: ignore

    return response  # type: ignore


# Exception handlers
async def custom_http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom HTTP exception handler with structured error response."""
    error_response = ErrorResponse(
        error=str(exc.detail),
        error_code=str(exc.status_code),
        details=None,
        request_id=getattr(request.state, "request_id", None),
    )

    logger.error(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=error_response.request_id,
    )

    return JSONResponse(status_code=exc.status_code, content=error_response.model_dump(mode="json"))


async def render_exception_handler(request: Request, exc: MarkdownRenderError) -> JSONResponse:
    """Handle Markdown rendering errors."""
    return _error_response(request, 422, "Markdown rendering failed", "RENDER_ERROR", exc)


async def page_generation_exception_handler(
    request: Request, exc: PageGenerationError
) -> JSONResponse:
    """Handle preview page generation errors."""
    return _error_response(
        request, 500, "Preview page generation failed", "PAGE_GENERATION_ERROR", exc
    )


async def document_not_found_exception_handler(
    request: Request, exc: DocumentNotFoundError
) -> JSONResponse:
    """Handle missing documents."""
    return _error_response(request, 404, "Document not found", "DOCUMENT_NOT_FOUND", exc)


async def document_access_exception_handler(
    request: Request, exc: DocumentAccessError
) -> JSONResponse:
    """Handle document paths outside the documents root."""
    return _error_response(
        request, 403, "Access to document denied", "DOCUMENT_ACCESS_DENIED", exc
    )


async def document_decode_exception_handler(
    request: Request, exc: DocumentDecodeError
) -> JSONResponse:
    """Handle documents that cannot be decoded."""
    return _error_response(
        request, 422, "Document is not valid UTF-8", "DOCUMENT_DECODE_ERROR", exc
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """General exception handler for unexpected errors."""
    error_response = ErrorResponse(
        error="Internal server error",
        error_code="INTERNAL_ERROR",
        details={"exception": str(exc)} if get_settings().debug else None,
        request_id=getattr(request.state, "request_id", None),
    )

    logger.error(
        "Unhandled exception",
        exception=str(exc),
        request_id=error_response.request_id,
        exc_info=True,
    )

    return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))


async def root() -> dict[str, Any]:
    """
    Root endpoint with basic API information.
    """
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Render Markdown documents to HTML previews",
        "docs_url": "/docs" if settings.enable_docs else None,
        "health_check": "/health",
        "endpoints": {
            "render": "POST /api/v1/render",
            "preview": "POST /api/v1/preview",
            "preview_file": "GET /api/v1/preview/file?path=...",
            "emoji": "GET /emoji/{name}.png",
        },
    }


async def emoji_image(name: str) -> FileResponse:
    """
    Serve a gemoji image from the configured emoji image directory.

    Args:
        name: Gemoji name

    Returns:
        PNG image
    """
    image_dir = get_settings().emoji_image_dir
    if image_dir is None:
        raise HTTPException(status_code=404, detail="Emoji images are not configured")

    image_path = resolve_within(image_dir, f"{name}.png")
    if not image_path.is_file():
        raise HTTPException(status_code=404, detail=f"Emoji not found: {name}")

    return FileResponse(image_path, media_type="image/png")


def create_app() -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.
    Used by integration tests, the CLI and deployment scripts.

    Returns:
        FastAPI application instance
    """
    settings = get_settings()
    application = FastAPI(
        title="vmd Markdown Preview",
        description="Render Markdown documents to HTML previews",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.add_middleware(GZipMiddleware, minimum_size=1000)
    application.middleware("http")(add_request_id)

    application.add_exception_handler(HTTPException, custom_http_exception_handler)  # type: ignore[arg-type]
    application.add_exception_handler(MarkdownRenderError, render_exception_handler)  # type: ignore[arg-type]
    application.add_exception_handler(PageGenerationError, page_generation_exception_handler)  # type: ignore[arg-type]
    application.add_exception_handler(DocumentNotFoundError, document_not_found_exception_handler)  # type: ignore[arg-type]
    application.add_exception_handler(DocumentAccessError, document_access_exception_handler)  # type: ignore[arg-type]
    application.add_exception_handler(DocumentDecodeError, document_decode_exception_handler)  # type: ignore[arg-type]
    application.add_exception_handler(Exception, general_exception_handler)

    application.add_api_route("/", root, methods=["GET"], tags=["General"])
    application.add_api_route(
        "/emoji/{name}.png", emoji_image, methods=["GET"], tags=["Emoji"], response_class=FileResponse
    )
    application.include_router(health_router)
    application.include_router(render_router)

    return application


app = create_app()


# Development server runner
def run_development_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run development server with auto-reload."""
    settings = get_settings()
    uvicorn.run(
        "vmd.api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_development_server()
