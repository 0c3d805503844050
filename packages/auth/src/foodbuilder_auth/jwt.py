"""Firebase ID token claim decoding.

The app is a token *holder*, not a token *verifier*: Firestore validates the
signature on every request. We only read the claims to show who is signed in
and how, so the signature check is skipped. Never use these helpers to make
an authorization decision.
"""

from __future__ import annotations

import jwt as pyjwt
from foodbuilder_shared.auth_models import AuthUser


def decode_id_token(token: str) -> AuthUser:
    """Read the claims of a Firebase ID token without verifying it.

    Args:
        token: The raw ID token returned by sign-in or refresh.

    Returns:
        AuthUser with user_id, email, sign-in provider and expiry.

    Raises:
        pyjwt.DecodeError: Malformed token.
        pyjwt.MissingRequiredClaimError: ``exp`` or ``sub`` missing.
    """
    payload = pyjwt.decode(
        token,
        options={"verify_signature": False, "require": ["exp", "sub"]},
    )

    firebase = payload.get("firebase") or {}
    return AuthUser(
        user_id=payload.get("user_id") or payload["sub"],
        email=payload.get("email", ""),
        provider=firebase.get("sign_in_provider", ""),
        exp=payload["exp"],
    )


def get_user_id(token: str) -> str:
    """Convenience wrapper — returns just the user_id string."""
    return decode_id_token(token).user_id
