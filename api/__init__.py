"""HTTP surface for the generation engine."""

from .app import create_app

__all__ = ["create_app"]
