"""Static Firebase configuration, read from the environment.

The API key and project id are required. Test credentials are optional —
when both are present the home view signs in with them, otherwise it signs
in anonymously.

Usage:
    from foodbuilder_shared.config import load_config

    config = load_config()
    config.project_id
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel

from foodbuilder_shared.endpoints import CATEGORIES_COLLECTION, DEFAULT_TIMEOUT_SECONDS


class FirebaseConfig(BaseModel):
    """Everything needed to reach one Firebase project."""

    api_key: str
    project_id: str
    test_email: str | None = None
    test_password: str | None = None
    categories_collection: str = CATEGORIES_COLLECTION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_test_credentials(self) -> bool:
        return bool(self.test_email and self.test_email.strip()) and bool(
            self.test_password and self.test_password.strip()
        )


def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "")
    if not value:
        raise RuntimeError(
            f"{name} environment variable is not set. "
            "Copy the value from the Firebase console (Project settings → General)."
        )
    return value


def load_config(env: Mapping[str, str] | None = None) -> FirebaseConfig:
    """Build a FirebaseConfig from environment variables.

    Reads FIREBASE_API_KEY and FIREBASE_PROJECT_ID (required), plus
    FIREBASE_TEST_EMAIL, FIREBASE_TEST_PASSWORD, FIREBASE_CATEGORIES_COLLECTION
    and FIREBASE_HTTP_TIMEOUT when set.
    """
    if env is None:
        env = os.environ

    config = FirebaseConfig(
        api_key=_required(env, "FIREBASE_API_KEY"),
        project_id=_required(env, "FIREBASE_PROJECT_ID"),
        test_email=env.get("FIREBASE_TEST_EMAIL") or None,
        test_password=env.get("FIREBASE_TEST_PASSWORD") or None,
    )
    if env.get("FIREBASE_CATEGORIES_COLLECTION"):
        config.categories_collection = env["FIREBASE_CATEGORIES_COLLECTION"]
    if env.get("FIREBASE_HTTP_TIMEOUT"):
        config.timeout_seconds = float(env["FIREBASE_HTTP_TIMEOUT"])
    return config
