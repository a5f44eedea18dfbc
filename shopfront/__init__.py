"""Shopfront: JSON-file backed product catalog with local accounts."""

from .app import create_app

__all__ = ["create_app"]
