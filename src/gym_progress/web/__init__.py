"""Web interface for gym-progress."""

from .app import create_app

__all__ = ["create_app"]
