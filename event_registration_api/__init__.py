"""
Top‑level package for the Event Registration API.

All functionality lives in submodules under ``app``; the ASGI
application is ``event_registration_api.app.main:app``.
"""

__all__ = []
