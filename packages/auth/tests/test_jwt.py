"""Tests for Firebase ID token claim decoding."""

from __future__ import annotations

import time

import httpx
import jwt as pyjwt
import pytest
from foodbuilder_auth.jwt import decode_id_token, get_user_id
from foodbuilder_shared.auth_models import AuthUser

SECRET = "any-secret-the-client-never-checks-signatures"


def _make_token(
    sub: str = "uid-123",
    email: str = "cook@example.com",
    provider: str = "password",
    exp: int | None = None,
    **extra: object,
) -> str:
    """Helper — build a JWT with Firebase-shaped claims."""
    payload: dict[str, object] = {
        "sub": sub,
        "user_id": sub,
        "email": email,
        "exp": exp or int(time.time()) + 3600,
        "aud": "foodbuilder-test",
        "iss": "https://securetoken.google.com/foodbuilder-test",
        "firebase": {"sign_in_provider": provider, "identities": {}},
        **extra,
    }
    return pyjwt.encode(payload, SECRET, algorithm="HS256")


class TestDecodeIdToken:
    def test_password_token(self) -> None:
        user = decode_id_token(_make_token())

        assert isinstance(user, AuthUser)
        assert user.user_id == "uid-123"
        assert user.email == "cook@example.com"
        assert user.provider == "password"
        assert not user.is_anonymous

    def test_anonymous_token_has_no_email(self) -> None:
        payload = {
            "sub": "anon-uid",
            "exp": int(time.time()) + 3600,
            "firebase": {"sign_in_provider": "anonymous"},
        }
        token = pyjwt.encode(payload, SECRET, algorithm="HS256")

        user = decode_id_token(token)
        assert user.user_id == "anon-uid"
        assert user.email == ""
        assert user.is_anonymous

    def test_expired_token_still_decodes(self) -> None:
        """Expiry is tracked by the session, not by the claims reader."""
        user = decode_id_token(_make_token(exp=int(time.time()) - 60))
        assert user.exp < time.time()

    def test_missing_sub_raises(self) -> None:
        token = pyjwt.encode({"exp": int(time.time()) + 3600}, SECRET, algorithm="HS256")
        with pytest.raises(pyjwt.MissingRequiredClaimError):
            decode_id_token(token)

    def test_malformed_token_raises(self) -> None:
        with pytest.raises(pyjwt.DecodeError):
            decode_id_token("not.a.jwt")


class TestGetUserId:
    def test_returns_user_id_string(self) -> None:
        assert get_user_id(_make_token(sub="abc-def-ghi")) == "abc-def-ghi"


class TestCurrentUser:
    async def test_decodes_session_token(self, auth_client, transport) -> None:
        token = _make_token(sub="uid-9", provider="anonymous", email="")
        transport.queue(
            httpx.Response(
                200,
                json={"idToken": token, "refreshToken": "r", "expiresIn": "3600", "localId": "uid-9"},
            )
        )
        await auth_client.sign_in_anonymously()

        user = auth_client.current_user()
        assert user.user_id == "uid-9"
        assert user.is_anonymous
