"""Error taxonomy shared by the auth and data-access clients.

Every non-2xx response from a Firebase endpoint becomes one of these
exceptions. They carry the status code, reason phrase and raw response body
so the caller (ultimately the home view) can show exactly what the backend
said. Nothing here is retried.

  AuthError    — identity endpoints (sign-in, anonymous sign-up, refresh)
  QueryError   — runQuery (non-2xx or a malformed payload)
  WriteError   — document PATCH
  DeleteError  — document DELETE
  ArgumentError — a required argument was missing before any call was made
"""

from __future__ import annotations

import httpx


class FirebaseApiError(Exception):
    """A Firebase endpoint answered with something we can't use."""

    def __init__(
        self,
        operation: str,
        status_code: int | None = None,
        reason: str = "",
        body: str = "",
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"{operation} failed: {status_code} {reason} - {body}")

    @classmethod
    def from_response(cls, operation: str, response: httpx.Response) -> FirebaseApiError:
        """Build the error from a received response, embedding its raw body."""
        return cls(
            operation,
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=response.text,
        )


class AuthError(FirebaseApiError):
    """Identity Toolkit / Secure Token call failed."""


class QueryError(FirebaseApiError):
    """Firestore runQuery failed or returned a payload we couldn't parse."""


class WriteError(FirebaseApiError):
    """Firestore document write failed."""


class DeleteError(FirebaseApiError):
    """Firestore document delete failed."""


class ArgumentError(ValueError):
    """A required argument was missing; raised before any network call."""
