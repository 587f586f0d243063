"""Command-line interface for AI Mentor."""

from .app import app, main

__all__ = ["app", "main"]
