"""
vmd Markdown Renderer
=====================

Render local Markdown and HTML documents into preview pages.

This package provides:
- Markdown rendering pipeline built on markdown-it-py with emoji, checklist,
  code highlighting, heading slug and front matter transformers
- Preview page generation with Jinja2 templates and stylesheets
- FastAPI REST endpoints for HTTP access
- Command line rendering of documents
"""

__version__ = "1.0.0"
__author__ = "vmd Team"
