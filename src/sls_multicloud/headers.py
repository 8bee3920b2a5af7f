"""StringParams: case-insensitive ordered string mapping used for headers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any


class StringParams(MutableMapping[str, str]):
    """Ordered mapping whose keys compare case-insensitively.

    The casing of the first insertion of a key is kept for iteration and
    ``to_dict()``; later writes with a different casing update the value only.
    """

    def __init__(
        self, initial: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None
    ) -> None:
        self._store: dict[str, tuple[str, str]] = {}
        if initial is not None:
            self.update(initial)

    def __getitem__(self, key: str) -> str:
        return self._store[key.lower()][1]

    def __setitem__(self, key: str, value: Any) -> None:
        lowered = key.lower()
        existing = self._store.get(lowered)
        original_key = existing[0] if existing is not None else key
        self._store[lowered] = (original_key, str(value))

    def __delitem__(self, key: str) -> None:
        del self._store[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            mine = {k.lower(): v for k, v in self.items()}
            theirs = {str(k).lower(): str(v) for k, v in other.items()}
            return mine == theirs
        return NotImplemented

    def __repr__(self) -> str:
        return f"StringParams({self.to_dict()!r})"

    def to_dict(self) -> dict[str, str]:
        return dict(self._store.values())

    def copy(self) -> StringParams:
        return StringParams(self.to_dict())
