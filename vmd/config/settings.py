"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional, List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json
from pathlib import Path


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="vmd", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=True, description="Debug mode")

    # Server Configuration
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # Front Matter Configuration
    frontmatter_renderer: str = Field(
        default="table", description="Front matter render mode: none, code, table"
    )
    frontmatter_formats: str = Field(
        default="yaml,toml,json", description="Comma separated front matter formats"
    )

    # Emoji Configuration
    emoji_image_dir: Optional[Path] = Field(
        default=None, description="Directory containing <name>.png gemoji images"
    )
    emoji_url_template: str = Field(
        default="emoji://{name}", description="URL template for emoji images"
    )

    # Stylesheet Configuration
    main_stylesheet: Optional[Path] = Field(default=None, description="Main stylesheet path")
    extra_stylesheet: Optional[Path] = Field(default=None, description="Extra stylesheet path")
    highlight_stylesheet: Optional[Path] = Field(
        default=None, description="Code highlight stylesheet path"
    )
    highlight_theme: str = Field(default="default", description="Pygments highlight theme")

    # Document Configuration
    documents_root: Path = Field(
        default=Path("."), description="Root directory for documents served over HTTP"
    )

    # API Documentation Configuration
    enable_docs: bool = Field(default=True, description="Enable FastAPI docs endpoint")

    # Security Configuration
    allowed_hosts: List[str] = Field(default=["*"], description="Allowed hosts for CORS")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("frontmatter_renderer")
    @classmethod
    def validate_frontmatter_renderer(cls, v: str) -> str:
        """Validate front matter render mode."""
        allowed = {"none", "code", "table"}
        if v.lower() not in allowed:
            raise ValueError(f"Unknown Front Matter render mode: {v}")
        return v.lower()

    @field_validator("frontmatter_formats")
    @classmethod
    def validate_frontmatter_formats(cls, v: str) -> str:
        """Validate and normalize front matter formats."""
        allowed = {"yaml", "toml", "json"}
        formats = [fmt.strip().lower() for fmt in v.split(",") if fmt.strip()]
        unknown = [fmt for fmt in formats if fmt not in allowed]
        if unknown:
            raise ValueError(f"Unknown Front Matter formats: {', '.join(unknown)}")
        return ",".join(formats)

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse allowed hosts from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["*"] or ["host1", "host2"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "*" or "host1,host2"
            return [host.strip() for host in v.split(",") if host.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="VMD_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
