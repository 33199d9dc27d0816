"""
FastAPI REST Endpoints
======================

REST API endpoints for HTTP access to Markdown rendering functionality.

Endpoints:
- POST /api/v1/render: Render Markdown to an HTML fragment
- POST /api/v1/preview: Render document contents to a preview page
- GET /api/v1/preview/file: Render a file under the documents root
- GET /emoji/{name}.png: Serve emoji images
- GET /health: Health check endpoint
"""
