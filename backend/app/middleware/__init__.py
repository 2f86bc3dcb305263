"""Middleware exports."""

from .auth import APIKeyMiddleware

__all__ = ["APIKeyMiddleware"]
