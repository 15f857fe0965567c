"""Favorites store: the user's favorite city names, in insertion order.

Names are compared case-insensitively; the first spelling added is kept.
Where the list lives is a strategy picked at construction time:

- ``LocalFavorites`` (uncontrolled): the store owns the list, loads it once
  from on-device storage and rewrites it on every change.
- ``ExternalFavorites`` (controlled): an owner supplies the list and a
  mutator callback that receives every new list.
"""

import json
import logging
from collections.abc import Callable
from typing import Any, Protocol

from skyboard.client.storage import KeyValueStorage

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoriteCities"


class FavoritesStrategy(Protocol):
    def load(self) -> list[str]: ...

    def save(self, names: list[str]) -> None: ...


class LocalFavorites:
    def __init__(self, storage: KeyValueStorage, key: str = FAVORITES_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> list[str]:
        return parse_favorites(self.storage.get_item(self.key))

    def save(self, names: list[str]) -> None:
        self.storage.set_item(self.key, json.dumps(names))


class ExternalFavorites:
    def __init__(self, favorites: list[str], on_change: Callable[[list[str]], None]):
        self.favorites = favorites
        self.on_change = on_change

    def load(self) -> list[str]:
        return _dedupe(
            name.strip()
            for name in self.favorites
            if isinstance(name, str) and name.strip()
        )

    def save(self, names: list[str]) -> None:
        self.favorites = names
        self.on_change(list(names))


class FavoritesStore:
    def __init__(self, strategy: FavoritesStrategy):
        self.strategy = strategy
        self._names = strategy.load()

    @classmethod
    def create(
        cls,
        storage: KeyValueStorage,
        favorites: list[str] | None = None,
        on_change: Callable[[list[str]], None] | None = None,
        key: str = FAVORITES_KEY,
    ) -> "FavoritesStore":
        """Controlled only when both list and mutator are given; otherwise local."""
        if favorites is not None and on_change is not None:
            return cls(ExternalFavorites(favorites, on_change))
        return cls(LocalFavorites(storage, key))

    @property
    def controlled(self) -> bool:
        return isinstance(self.strategy, ExternalFavorites)

    def list(self) -> list[str]:
        return list(self._names)

    def contains(self, name: str) -> bool:
        return _find(self._names, name) is not None

    def add(self, name: str) -> bool:
        """Append a name; no-op (False) when blank or already present in any case."""
        name = name.strip()
        if not name or self.contains(name):
            return False
        self._names.append(name)
        self.strategy.save(self.list())
        return True

    def remove(self, name: str) -> bool:
        index = _find(self._names, name.strip())
        if index is None:
            return False
        del self._names[index]
        self.strategy.save(self.list())
        return True


def parse_favorites(raw: str | None) -> list[str]:
    """Decode the persisted favorites value, treating anything malformed as empty.

    Legacy entries stored as objects contribute their ``name`` field.
    """
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Stored favorites are not valid JSON, resetting to empty")
        return []
    if not isinstance(data, list):
        logger.warning("Stored favorites is not an array, resetting to empty")
        return []
    names = [n for n in (_entry_name(item) for item in data) if n]
    if data and not names:
        logger.warning("Stored favorites held no usable names, resetting to empty")
    return _dedupe(names)


def _entry_name(item: Any) -> str | None:
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict) and isinstance(item.get("name"), str):
        return item["name"].strip()
    return None


def _dedupe(names) -> list[str]:
    seen: set[str] = set()
    result = []
    for name in names:
        if name.casefold() not in seen:
            seen.add(name.casefold())
            result.append(name)
    return result


def _find(names: list[str], name: str) -> int | None:
    folded = name.casefold()
    for i, existing in enumerate(names):
        if existing.casefold() == folded:
            return i
    return None
