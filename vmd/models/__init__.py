"""
Data Models
===========

Pydantic data models for request/response validation and internal data structures.

Models:
- schemas: render options, render results, documents and API schemas
"""
