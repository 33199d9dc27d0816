"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides settings overrides, sample documents and an API test client.
"""

import os

os.environ.setdefault("VMD_ENVIRONMENT", "testing")
os.environ.setdefault("VMD_LOG_LEVEL", "WARNING")

import pytest
from pathlib import Path
from typing import Generator
from fastapi.testclient import TestClient

from vmd.config.settings import Settings, get_settings
from vmd.api.main import create_app
from vmd.models.schemas import FrontMatterRenderMode, PageOptions, RenderOptions

from tests.data.sample_markdown_documents import (
    CHECKLIST_DOCUMENT,
    EMOJI_DOCUMENT,
    FULL_DOCUMENT,
    HTML_DOCUMENT,
    YAML_FRONT_MATTER_DOCUMENT,
)


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Settings:
    """Application settings with the documents root pointed at a temp directory."""
    current = get_settings()
    monkeypatch.setattr(current, "documents_root", tmp_path)
    monkeypatch.setattr(current, "emoji_image_dir", None)
    monkeypatch.setattr(current, "frontmatter_renderer", "table")
    monkeypatch.setattr(current, "frontmatter_formats", "yaml,toml,json")
    monkeypatch.setattr(current, "debug", True)
    return current


@pytest.fixture
def render_options() -> RenderOptions:
    """Default render options."""
    return RenderOptions()


@pytest.fixture
def code_render_options() -> RenderOptions:
    """Render options showing front matter as a code block."""
    return RenderOptions(frontmatter_renderer=FrontMatterRenderMode.CODE)


@pytest.fixture
def page_options() -> PageOptions:
    """Page options using the bundled stylesheets."""
    return PageOptions(title="Test - vmd", base_url="file:///tmp/")


@pytest.fixture
def emoji_dir(tmp_path: Path) -> Path:
    """Directory holding a few gemoji images."""
    directory = tmp_path / "emoji"
    directory.mkdir()
    for name in ("smile", "heart", "+1"):
        (directory / f"{name}.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return directory


@pytest.fixture
def documents_root(settings: Settings) -> Path:
    """Documents root populated with sample files."""
    root = Path(settings.documents_root)
    (root / "README.md").write_text(FULL_DOCUMENT, encoding="utf-8")
    (root / "page.html").write_text(HTML_DOCUMENT, encoding="utf-8")
    docs = root / "docs"
    docs.mkdir()
    (docs / "todo.md").write_text(CHECKLIST_DOCUMENT, encoding="utf-8")
    (docs / "meta.md").write_text(YAML_FRONT_MATTER_DOCUMENT, encoding="utf-8")
    (docs / "emoji.md").write_text(EMOJI_DOCUMENT, encoding="utf-8")
    return root


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """FastAPI test client."""
    with TestClient(create_app()) as test_client:
        yield test_client
