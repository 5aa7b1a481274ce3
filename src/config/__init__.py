"""
stylemark configuration

AppSettings reads STYLEMARK_* environment variables (and .env); appsettings
is the shared default instance used when a caller passes no settings.
"""

from .settings import appsettings, AppSettings

__all__ = ["appsettings", "AppSettings"]
