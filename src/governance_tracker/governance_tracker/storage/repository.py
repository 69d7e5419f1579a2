from __future__ import annotations

from typing import Optional, Protocol, Sequence


class KeyValueStore(Protocol):
    """Interface of a profile store: raw text blobs addressed by key.

    Note (DIP): the override store and session manager depend on this
    interface, not on a concrete medium, so tests run against memory.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> Sequence[str]:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError
