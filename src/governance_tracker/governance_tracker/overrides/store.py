"""Override store: a client-local value that supersedes a static source.

Each entity type owns one blob. ``write`` always replaces the whole blob and
``read`` never merges it with the static fallback: once an override exists it
wins until it is cleared.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from ..core.enums import StorageKey
from ..core.exceptions import StorageCorruptError
from ..storage.repository import KeyValueStore

LOGGER = logging.getLogger("governance_tracker.overrides")

T = TypeVar("T")


def _identity(value: Any) -> Any:
    return value


class OverrideStore(Generic[T]):
    def __init__(
        self,
        store: KeyValueStore,
        key: StorageKey | str,
        *,
        serialize: Callable[[T], Any] = _identity,
        deserialize: Callable[[Any], T] = _identity,
    ):
        self._store = store
        self._key = key.value if isinstance(key, StorageKey) else str(key)
        self._serialize = serialize
        self._deserialize = deserialize

    @property
    def key(self) -> str:
        return self._key

    def exists(self) -> bool:
        return self._store.get(self._key) is not None

    def load(self) -> Optional[T]:
        """Return the persisted override, ``None`` when absent.

        Raises StorageCorruptError when the blob is not valid JSON or does not
        have the expected shape.
        """

        raw = self._store.get(self._key)
        if raw is None:
            return None
        try:
            return self._deserialize(json.loads(raw))
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise StorageCorruptError(f"Corrupt data under {self._key}") from exc

    def read(self, fallback: T) -> T:
        return self.read_lazy(lambda: fallback)

    def read_lazy(self, fallback_factory: Callable[[], T]) -> T:
        """Like ``read`` but only builds the static fallback when it is needed."""
        try:
            value = self.load()
        except StorageCorruptError:
            LOGGER.warning("Ignoring corrupt override %s; using static data", self._key)
            value = None
        return fallback_factory() if value is None else value

    def write(self, value: T) -> None:
        self._store.set(self._key, json.dumps(self._serialize(value), ensure_ascii=False))
        LOGGER.debug("Wrote override %s", self._key)

    def clear(self) -> None:
        self._store.remove(self._key)
