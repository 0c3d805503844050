"""Runner entrypoint — shows the home view once, on the terminal.

Usage:
  python -m foodbuilder_app.runner

Reads the Firebase settings from the environment (a ``.env`` file in the
working directory is loaded first). Signs in the way the home view does,
lists the categories, prints them, and exits. Errors are printed the way the
app shows them: the raw error text in an alert.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv
from foodbuilder_shared.catalog_models import Category
from foodbuilder_shared.config import load_config

from foodbuilder_app.home import HomeView
from foodbuilder_app.services import build_services

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def print_alert(title: str, message: str) -> None:
    print(f"[{title}] {message}", file=sys.stderr)


def print_categories(categories: list[Category]) -> None:
    for category in categories:
        line = f"{category.id}\t{category.name}"
        if category.description:
            line += f"\t{category.description}"
        print(line)


async def run_home() -> None:
    """Build the services, show the home view once, and close the HTTP client."""
    config = load_config()
    services = build_services(config)
    try:
        view = HomeView(services, alert=print_alert)
        view.categories.subscribe(print_categories)
        await view.on_appearing()
    finally:
        await services.aclose()


def main() -> None:
    """CLI entrypoint."""
    load_dotenv()
    try:
        asyncio.run(run_home())
    except RuntimeError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
