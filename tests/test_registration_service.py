"""
Service-level tests for ``RegistrationService``.

These exercise what the HTTP tests cannot reach easily: concurrent
registrations against one event, and short code collisions.
"""
import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from conftest import API, EVENT_PAYLOAD

from event_registration_api.app.core.config import settings
from event_registration_api.app.core.db import get_connection
from event_registration_api.app.schemas.participant import ParticipantCreate
from event_registration_api.app.services import registration_service
from event_registration_api.app.services.registration_service import RegistrationService


def _register_in_parallel(event_id, participants):
    barrier = threading.Barrier(len(participants))

    def worker(participant):
        barrier.wait()
        return asyncio.run(RegistrationService.register(event_id, participant))

    with ThreadPoolExecutor(max_workers=len(participants)) as pool:
        return list(pool.map(worker, participants))


def test_concurrent_registrations_are_all_kept(event):
    participants = [ParticipantCreate(name=f"P{i}", phone=f"555-1{i:03d}") for i in range(20)]
    codes = _register_in_parallel(event["id"], participants)

    assert None not in codes
    assert len(set(codes)) == 20
    owner = {"user_id": event["user"]}
    stored = asyncio.run(RegistrationService.list_participants(event["id"], owner))
    assert sorted(p.phone for p in stored) == sorted(p.phone for p in participants)


def test_concurrent_duplicates_admit_exactly_one(event):
    participants = [ParticipantCreate(name=f"Twin{i}", phone="555-0001") for i in range(10)]
    codes = _register_in_parallel(event["id"], participants)

    assert len([code for code in codes if code is not None]) == 1
    owner = {"user_id": event["user"]}
    stored = asyncio.run(RegistrationService.list_participants(event["id"], owner))
    assert len(stored) == 1


def test_short_code_collision_draws_a_new_code(event, monkeypatch):
    codes = iter(["taken", "taken", "fresh"])
    monkeypatch.setattr(registration_service, "generate_short_id", lambda: next(codes))

    first = asyncio.run(RegistrationService.register(event["id"], ParticipantCreate(name="A", phone="1")))
    second = asyncio.run(RegistrationService.register(event["id"], ParticipantCreate(name="B", phone="2")))

    assert first == "taken"
    assert second == "fresh"


def test_short_codes_are_unique_across_events(client, auth_headers, event, monkeypatch):
    other = client.post(f"{API}/events/", json=EVENT_PAYLOAD, headers=auth_headers).json()
    codes = iter(["shared", "shared", "other"])
    monkeypatch.setattr(registration_service, "generate_short_id", lambda: next(codes))

    asyncio.run(RegistrationService.register(event["id"], ParticipantCreate(name="A", phone="1")))
    second = asyncio.run(RegistrationService.register(other["id"], ParticipantCreate(name="B", phone="1")))
    assert second == "other"


def test_gives_up_after_repeated_collisions(event, monkeypatch):
    monkeypatch.setattr(registration_service, "generate_short_id", lambda: "taken")
    monkeypatch.setattr(settings, "short_id_attempts", 3)

    asyncio.run(RegistrationService.register(event["id"], ParticipantCreate(name="A", phone="1")))
    with pytest.raises(RuntimeError):
        asyncio.run(RegistrationService.register(event["id"], ParticipantCreate(name="B", phone="2")))


def test_generated_codes_are_url_safe(monkeypatch):
    monkeypatch.setattr(settings, "short_id_bytes", 6)
    code = registration_service.generate_short_id()
    assert len(code) == 8
    assert all(ch.isalnum() or ch in "-_" for ch in code)


def test_update_status_reports_changed_rows(event):
    owner = {"user_id": event["user"]}
    code = asyncio.run(RegistrationService.register(event["id"], ParticipantCreate(name="A", phone="1")))
    assert asyncio.run(RegistrationService.update_status(event["id"], code, "confirmed", owner)) == 1
    assert asyncio.run(RegistrationService.update_status(event["id"], "missing", "confirmed", owner)) == 0


def test_update_status_checks_ownership(event):
    with pytest.raises(PermissionError):
        asyncio.run(RegistrationService.update_status(event["id"], "any", "x", {"user_id": -1}))
    with pytest.raises(ValueError):
        asyncio.run(RegistrationService.update_status(9999, "any", "x", {"user_id": event["user"]}))


def test_event_deleted_during_registration_is_not_found(event, monkeypatch):
    def delete_then_draw():
        conn = get_connection()
        try:
            conn.execute("DELETE FROM events WHERE id = ?", (event["id"],))
            conn.commit()
        finally:
            conn.close()
        return "code1"

    monkeypatch.setattr(registration_service, "generate_short_id", delete_then_draw)
    with pytest.raises(ValueError, match="Event not found"):
        asyncio.run(RegistrationService.register(event["id"], ParticipantCreate(name="A", phone="1")))
