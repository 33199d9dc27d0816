"""
Core Business Logic
==================

Core business logic modules for Markdown rendering and preview pages.

Modules:
- markdown: Markdown parsing and tree transformers
- rendering: Preview page generation with templates and stylesheets
- documents: Document loading and path resolution
"""
