"""
TrueNamePath API package.

Provides the FastAPI application for context-aware name resolution.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
