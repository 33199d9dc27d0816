"""
Pydantic Models and Schemas
===========================

Core data models for render options, render results, documents and
API requests/responses. All models include validation and type hints.
"""

from typing import Optional, List, Dict, Any, Union, Literal
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


# Enums
class FrontMatterFormat(str, Enum):
    """Supported front matter formats."""
    YAML = "yaml"
    TOML = "toml"
    JSON = "json"


class FrontMatterRenderMode(str, Enum):
    """How front matter is rendered into the document."""
    NONE = "none"
    CODE = "code"
    TABLE = "table"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Rendering Models
class RenderOptions(BaseModel):
    """Options for rendering Markdown to HTML."""
    frontmatter_renderer: FrontMatterRenderMode = Field(
        FrontMatterRenderMode.TABLE, description="Front matter render mode"
    )
    frontmatter_formats: List[FrontMatterFormat] = Field(
        default_factory=lambda: list(FrontMatterFormat),
        description="Enabled front matter formats",
    )
    emoji_url_template: str = Field("emoji://{name}", description="URL template for emoji images")
    emoji_image_dir: Optional[Path] = Field(
        None, description="Directory of <name>.png emoji images; settings only over the API"
    )

    @field_validator("frontmatter_renderer", mode="before")
    @classmethod
    def normalize_renderer(cls, v: Any) -> Any:
        """Accept render modes in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("frontmatter_formats", mode="before")
    @classmethod
    def parse_formats(cls, v: Union[str, List[Any]]) -> List[Any]:
        """Parse formats from a comma separated string or list."""
        if isinstance(v, str):
            v = v.split(",")
        return [
            item.strip().lower() if isinstance(item, str) else item
            for item in v
            if not isinstance(item, str) or item.strip()
        ]

    @field_validator("emoji_url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        """Ensure the emoji URL template references the emoji name."""
        if "{name}" not in v:
            raise ValueError("Emoji URL template must contain '{name}'")
        return v

    @classmethod
    def from_settings(cls) -> "RenderOptions":
        """Build render options from application settings."""
        from vmd.config.settings import get_settings

        settings = get_settings()
        return cls(
            frontmatter_renderer=settings.frontmatter_renderer,
            frontmatter_formats=settings.frontmatter_formats,
            emoji_url_template=settings.emoji_url_template,
            emoji_image_dir=settings.emoji_image_dir,
        )


class FrontMatter(BaseModel):
    """Front matter found at the top of a document."""
    format: FrontMatterFormat = Field(..., description="Front matter format")
    raw: str = Field(..., description="Raw front matter text")
    data: Optional[Any] = Field(None, description="Parsed front matter data")
    error: Optional[str] = Field(None, description="Parse error message if parsing failed")


class Heading(BaseModel):
    """Heading collected while rendering."""
    level: int = Field(..., ge=1, le=6, description="Heading level")
    text: str = Field(..., description="Heading text")
    slug: str = Field(..., description="Unique heading id")


class RenderResult(BaseModel):
    """Result of Markdown rendering."""
    html: str = Field(..., description="Rendered HTML fragment")
    front_matter: Optional[FrontMatter] = Field(None, description="Document front matter")
    headings: List[Heading] = Field(default_factory=list, description="Document headings")
    emoji: List[str] = Field(default_factory=list, description="Emoji names substituted")
    processing_time: Optional[float] = Field(None, description="Rendering time in seconds")


# Document Models
class DocumentSource(BaseModel):
    """A document loaded for preview."""
    file_path: Optional[Path] = Field(None, description="Source file path")
    contents: str = Field("", description="Document contents")
    is_html: bool = Field(False, description="Whether the document is HTML")
    base_url: str = Field(..., description="Base URL for relative links")


class PageOptions(BaseModel):
    """Options for the preview page."""
    title: str = Field("vmd", description="Page title")
    main_stylesheet: Optional[Path] = Field(None, description="Main stylesheet path")
    extra_stylesheet: Optional[Path] = Field(None, description="Extra stylesheet path")
    highlight_stylesheet: Optional[Path] = Field(None, description="Highlight stylesheet path")
    highlight_theme: str = Field("default", description="Pygments highlight theme")
    base_url: Optional[str] = Field(None, description="Base URL for relative links")

    @classmethod
    def from_settings(cls, **overrides: Any) -> "PageOptions":
        """Build page options from application settings."""
        from vmd.config.settings import get_settings

        settings = get_settings()
        values: Dict[str, Any] = {
            "main_stylesheet": settings.main_stylesheet,
            "extra_stylesheet": settings.extra_stylesheet,
            "highlight_stylesheet": settings.highlight_stylesheet,
            "highlight_theme": settings.highlight_theme,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


# API Request/Response Models
class MarkdownRenderRequest(BaseModel):
    """Request model for Markdown rendering."""
    content: str = Field(..., description="Markdown content to render")
    options: Optional[RenderOptions] = Field(None, description="Render options")


class PreviewRequest(BaseModel):
    """Request model for preview page rendering."""
    content: str = Field(..., description="Document contents")
    title: Optional[str] = Field(None, description="Page title prefix")
    file_name: Optional[str] = Field(
        None, description="Original file name, used for the title and HTML detection"
    )
    options: Optional[RenderOptions] = Field(None, description="Render options")
    highlight_theme: Optional[str] = Field(None, description="Pygments highlight theme")


class RenderResponse(BaseModel):
    """Response model for Markdown rendering."""
    success: bool = Field(..., description="Whether rendering succeeded")
    result: Optional[RenderResult] = Field(None, description="Render result")
    error: Optional[str] = Field(None, description="Error message if failed")
    processing_time: float = Field(..., description="Total processing time")


# Health Check Models
class HealthStatus(BaseModel):
    """Health check status."""
    status: Literal["healthy", "unhealthy", "degraded"] = Field(..., description="Overall status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")
    version: str = Field(..., description="Application version")
    renderer: bool = Field(..., description="Markdown renderer status")
    emoji_images: bool = Field(..., description="Emoji image directory available")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
