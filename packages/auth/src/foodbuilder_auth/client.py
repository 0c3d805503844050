"""Firebase authentication client — owns the app's one session.

Three ways to get a session:

  sign_in_with_password — email/password via Identity Toolkit
  sign_in_anonymously   — anonymous sign-up via Identity Toolkit
  get_valid_token       — current token, refreshed or re-created as needed

The session lives in memory only; a restart means signing in again. All
reads and writes of it go through one asyncio.Lock, so concurrent callers of
get_valid_token() during an expired window wait for a single refresh and
then share its token instead of each starting their own.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar

import httpx
from foodbuilder_shared.auth_models import AuthUser, Session
from foodbuilder_shared.endpoints import (
    IDENTITY_TOOLKIT_URL,
    SECURE_TOKEN_URL,
    SIGN_IN_WITH_PASSWORD_PATH,
    SIGN_UP_PATH,
)
from foodbuilder_shared.errors import AuthError
from pydantic import BaseModel, Field, ValidationError

from foodbuilder_auth.jwt import decode_id_token

logger = logging.getLogger(__name__)

_ResponseT = TypeVar("_ResponseT", bound=BaseModel)


class SignInResponse(BaseModel):
    """Identity Toolkit response body (camelCase keys)."""

    id_token: str = Field(alias="idToken", min_length=1)
    refresh_token: str = Field(alias="refreshToken", default="")
    expires_in: int = Field(alias="expiresIn", default=3600)
    local_id: str = Field(alias="localId", default="")


class RefreshResponse(BaseModel):
    """Secure Token response body (snake_case keys)."""

    id_token: str = Field(min_length=1)
    refresh_token: str = ""
    expires_in: int = 3600
    user_id: str = ""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _payload_error(operation: str, response: httpx.Response, reason: str) -> AuthError:
    """AuthError for a 2xx response whose body we cannot use."""
    return AuthError(
        operation, status_code=response.status_code, reason=reason, body=response.text
    )


def _logged(error: AuthError) -> AuthError:
    logger.error(f"[Auth] {error}")
    return error


class FirebaseAuthClient:
    """Signs in against Firebase and hands out a valid ID token on demand."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        *,
        identity_url: str = IDENTITY_TOOLKIT_URL,
        token_url: str = SECURE_TOKEN_URL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._identity_url = identity_url.rstrip("/")
        self._token_url = token_url
        self._clock = clock
        self._session: Session | None = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def is_signed_in(self) -> bool:
        return self._session is not None

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """Exchange email/password for a new session."""
        payload = {"email": email, "password": password, "returnSecureToken": True}
        async with self._lock:
            response = await self._post_json(
                "signInWithPassword", SIGN_IN_WITH_PASSWORD_PATH, payload
            )
            return self._store(self._parse(SignInResponse, "signInWithPassword", response))

    async def sign_in_anonymously(self) -> Session:
        """Create an anonymous Firebase user and sign in as it."""
        async with self._lock:
            return await self._sign_in_anonymously_locked()

    async def get_valid_token(self) -> str:
        """Return an ID token that is usable right now.

        Unexpired token → returned as-is. Expired with a refresh token →
        exchanged at the Secure Token endpoint. No refresh token at all →
        anonymous sign-in.
        """
        async with self._lock:
            session = self._session
            if session is not None and session.is_valid(self._clock()):
                return session.id_token

            if session is None or not session.can_refresh:
                logger.debug("No refresh token, falling back to anonymous sign-in")
                session = await self._sign_in_anonymously_locked()
            else:
                session = await self._refresh_locked(session.refresh_token)
            return session.id_token

    async def sign_out(self) -> None:
        """Forget the current session. Nothing is persisted, so this is local only.

        Waits for any sign-in or refresh in flight, so a late response cannot
        put the session back.
        """
        async with self._lock:
            self._session = None

    def current_user(self) -> AuthUser | None:
        """Decoded claims of the current ID token, or None when signed out."""
        if self._session is None:
            return None
        return decode_id_token(self._session.id_token)

    # ------------------------------------------------------------------
    # Internals: callers must hold self._lock
    # ------------------------------------------------------------------

    async def _sign_in_anonymously_locked(self) -> Session:
        response = await self._post_json(
            "anonymous signUp", SIGN_UP_PATH, {"returnSecureToken": True}
        )
        return self._store(self._parse(SignInResponse, "anonymous signUp", response))

    async def _refresh_locked(self, refresh_token: str) -> Session:
        operation = "token refresh"
        logger.debug(f"[Auth] POST {self._token_url} (refresh)")
        response = await self._http.post(
            self._token_url,
            params={"key": self._api_key},
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
        )
        parsed = self._parse(RefreshResponse, operation, response)
        if not parsed.refresh_token:
            parsed.refresh_token = refresh_token
        return self._store(parsed)

    async def _post_json(
        self, operation: str, path: str, payload: dict[str, Any]
    ) -> httpx.Response:
        url = f"{self._identity_url}/{path}"
        logger.debug(f"[Auth] POST {url} ({operation})")
        return await self._http.post(url, params={"key": self._api_key}, json=payload)

    @staticmethod
    def _parse(
        model: type[_ResponseT], operation: str, response: httpx.Response
    ) -> _ResponseT:
        """Map a non-2xx or unreadable response to AuthError, otherwise validate it."""
        if not response.is_success:
            raise _logged(AuthError.from_response(operation, response))
        try:
            data = response.json()
        except ValueError as e:
            raise _logged(_payload_error(operation, response, "invalid JSON")) from e
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise _logged(_payload_error(operation, response, "malformed payload")) from e

    def _store(self, response: SignInResponse | RefreshResponse) -> Session:
        user_id = (
            response.local_id if isinstance(response, SignInResponse) else response.user_id
        )
        self._session = Session.issue(
            id_token=response.id_token,
            refresh_token=response.refresh_token,
            expires_in=response.expires_in,
            now=self._clock(),
            user_id=user_id,
        )
        return self._session
