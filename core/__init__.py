"""
Core package: configuration, database, errors, dependencies and middleware.
Kept apart from routes and repositories so each can be built and tested alone.
"""

from core.config import get_settings

__all__ = ["get_settings"]
