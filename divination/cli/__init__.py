"""Command-line presentation layer for the divination trick."""

from .main import app, main

__all__ = ["app", "main"]
