"""
Configuration package for codegutter

Provides caller-level defaults via environment variables using pydantic-settings.
"""

from .settings import appsettings, AppSettings

__all__ = ["appsettings", "AppSettings"]
