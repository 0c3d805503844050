"""Firebase verification script.

Walks the whole client against a real project, in the order the app uses it:
sign in, list categories, write a throwaway category, find it by name,
delete it, and confirm it is gone. Useful after rotating the API key or
changing Firestore security rules.

Prerequisites:
  - FIREBASE_API_KEY and FIREBASE_PROJECT_ID in the environment or .env
  - Optional FIREBASE_TEST_EMAIL / FIREBASE_TEST_PASSWORD (else anonymous)

Usage:
  python scripts/verify_firebase.py
"""

import asyncio
import logging
import uuid

from dotenv import load_dotenv
from foodbuilder_app.services import build_services
from foodbuilder_shared.catalog_models import Category
from foodbuilder_shared.config import load_config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main() -> None:
    """Run the full verification: auth, list, write, query, delete."""
    load_dotenv()
    services = build_services(load_config())
    config = services.config
    try:
        if config.has_test_credentials:
            await services.auth.sign_in_with_password(config.test_email, config.test_password)
        else:
            await services.auth.sign_in_anonymously()
        user = services.auth.current_user()
        logger.info(f"Signed in as '{user.user_id}' via {user.provider or 'unknown provider'}")

        categories = await services.firestore.list_categories()
        logger.info(f"Listed {len(categories)} categories from '{config.categories_collection}'")

        marker = f"zz-verify-{uuid.uuid4().hex[:8]}"
        await services.firestore.upsert_category(
            Category(id=marker, name=marker, description="verification, safe to delete")
        )
        found = await services.firestore.query_categories_by_name(marker, limit=1)
        assert found and found[0].id == marker, f"Written category not found: {found}"
        logger.info(f"Wrote and found '{marker}'")

        await services.firestore.delete_category(marker)
        after = await services.firestore.query_categories_by_name(marker, limit=1)
        assert not after or after[0].id != marker, f"Category '{marker}' survived delete"

        logger.info("VERIFICATION PASSED — auth, list, write, query and delete all work")
    finally:
        await services.aclose()


if __name__ == "__main__":
    asyncio.run(main())
