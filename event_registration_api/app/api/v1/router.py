"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
Registration routes are included before the event CRUD routes; both
live under ``/events``.
"""

from fastapi import APIRouter

from .endpoints import events, registrations, users

router = APIRouter()

router.include_router(registrations.router, prefix="/events", tags=["registrations"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(users.router, prefix="/users", tags=["users"])
