"""
Test Data Package
================

Sample Markdown and HTML documents for testing the rendering pipeline.
"""

from .sample_markdown_documents import (
    CHECKLIST_DOCUMENT,
    EMOJI_DOCUMENT,
    FULL_DOCUMENT,
    HEADINGS_DOCUMENT,
    HTML_DOCUMENT,
    YAML_FRONT_MATTER_DOCUMENT,
)

__all__ = [
    "CHECKLIST_DOCUMENT",
    "EMOJI_DOCUMENT",
    "FULL_DOCUMENT",
    "HEADINGS_DOCUMENT",
    "HTML_DOCUMENT",
    "YAML_FRONT_MATTER_DOCUMENT",
]
