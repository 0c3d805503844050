"""Home view — signs in, loads the categories, and shows errors as alerts.

Headless on purpose: the view owns its state (an observable list of
categories) and reports to whatever renders it through two hooks, list
observers and an alert callback. The runner renders to stdout; tests render
to lists.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from foodbuilder_shared.catalog_models import Category

from foodbuilder_app.services import AppServices

logger = logging.getLogger(__name__)

Alert = Callable[[str, str], None]


class ObservableList:
    """A list of categories that tells its observers when it changes."""

    def __init__(self) -> None:
        self._items: list[Category] = []
        self._observers: list[Callable[[list[Category]], None]] = []

    def subscribe(self, observer: Callable[[list[Category]], None]) -> None:
        self._observers.append(observer)

    def replace(self, items: Iterable[Category]) -> None:
        self._items = list(items)
        snapshot = list(self._items)
        for observer in self._observers:
            observer(snapshot)

    def clear(self) -> None:
        self.replace([])

    def __iter__(self) -> Iterator[Category]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Category:
        return self._items[index]


class HomeView:
    """The landing page: every appearance re-authenticates and reloads."""

    def __init__(self, services: AppServices, alert: Alert) -> None:
        self._services = services
        self._alert = alert
        self.categories = ObservableList()

    async def on_appearing(self) -> None:
        """Sign in (password when test credentials are configured, else anonymous), then load."""
        config = self._services.config
        auth = self._services.auth
        try:
            if config.has_test_credentials:
                await auth.sign_in_with_password(config.test_email, config.test_password)
            else:
                await auth.sign_in_anonymously()

            categories = await self._services.firestore.list_categories()
            self.categories.replace(categories)
            logger.info(f"[Home] loaded {len(categories)} categories")
        except Exception as e:
            logger.exception(f"[Home] Error on appearing: {e}")
            self._alert("Error", str(e))

    def on_category_tapped(self, category: Category) -> None:
        self._alert("Category", f"You selected: {category.name}")
