"""HTTP API for the document inspector."""

from .app import app

__all__ = ["app"]
