"""Auth domain models — the in-memory session and decoded token claims."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel

from foodbuilder_shared.endpoints import TOKEN_EXPIRY_MARGIN_SECONDS


class Session(BaseModel):
    """A signed-in Firebase session.

    Owned by the auth client and replaced wholesale on every sign-in or
    refresh. expires_at already has the safety margin subtracted, so the
    token is usable strictly before it.
    """

    id_token: str
    refresh_token: str = ""
    expires_at: datetime
    user_id: str = ""

    @classmethod
    def issue(
        cls,
        id_token: str,
        refresh_token: str,
        expires_in: int,
        now: datetime,
        user_id: str = "",
    ) -> Session:
        """Build a session from a token response received at ``now``."""
        lifetime = max(0, expires_in - TOKEN_EXPIRY_MARGIN_SECONDS)
        return cls(
            id_token=id_token,
            refresh_token=refresh_token,
            expires_at=now + timedelta(seconds=lifetime),
            user_id=user_id,
        )

    def is_valid(self, now: datetime) -> bool:
        return bool(self.id_token.strip()) and now < self.expires_at

    @property
    def can_refresh(self) -> bool:
        return bool(self.refresh_token.strip())


class AuthUser(BaseModel):
    """Decoded (unverified) Firebase ID token claims."""

    user_id: str
    email: str = ""
    provider: str = ""
    exp: int

    @property
    def is_anonymous(self) -> bool:
        return self.provider == "anonymous"
