"""
Rendering Module
===============

Preview page generation around rendered Markdown.

Components:
- html_generator: Build the preview page from a rendered document
- styles: Stylesheet loading and highlight themes
- templates: HTML page templates
- assets: Bundled stylesheets
"""
