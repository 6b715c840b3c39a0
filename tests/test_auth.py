"""
Tests for admin password and token helpers (pagebound/utils/auth.py)

Run: python -m pytest tests/test_auth.py -q
"""

from datetime import timedelta

from pagebound.utils.auth import (
    AUTHOR_SCOPE, create_access_token, decode_access_token, get_password_hash, verify_password
)


class TestPassword:

    def test_hash_round_trip(self):
        hashed = get_password_hash("open sesame")
        assert hashed != "open sesame"
        assert verify_password("open sesame", hashed)
        assert not verify_password("guess", hashed)

    def test_empty_inputs_never_match(self):
        assert not verify_password("", get_password_hash("x"))
        assert not verify_password("x", "")

    def test_unrecognised_hash(self):
        assert not verify_password("x", "not-a-hash")


class TestToken:

    def test_token_carries_scope(self):
        token = create_access_token({"sub": "admin", "scope": AUTHOR_SCOPE})
        payload = decode_access_token(token)
        assert payload["sub"] == "admin"
        assert payload["scope"] == AUTHOR_SCOPE

    def test_expired_token(self):
        token = create_access_token({"sub": "admin"}, expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_garbage_token(self):
        assert decode_access_token("not.a.token") is None
