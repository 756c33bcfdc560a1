"""
Unit tests for password hashing and token helpers.
"""
from event_registration_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_is_salted():
    first = hash_password("secret1")
    second = hash_password("secret1")
    assert first != second
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)
    assert not verify_password("secret2", first)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("secret1", "no-dollar-sign")
    assert not verify_password("secret1", "zz$zz")


def test_token_carries_claims():
    payload = decode_access_token(create_access_token({"sub": "jane@example.com"}))
    assert payload["sub"] == "jane@example.com"
    assert "exp" in payload


def test_garbage_tokens_decode_to_none():
    assert decode_access_token("") is None
    assert decode_access_token("a.b") is None
    assert decode_access_token("a.b.c") is None
    assert decode_access_token(create_access_token({"sub": "x"}, expires_delta=-1)) is None
