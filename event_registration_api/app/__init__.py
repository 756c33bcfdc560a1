"""
Application package initializer.

The project is organised into ``core`` (configuration, logging,
database, security, error handlers), ``schemas`` (pydantic models),
``services`` (business logic) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
