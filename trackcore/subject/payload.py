from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class Payload(Mapping[str, Any]):
    """Ordered key-value pairs attached to an outgoing event.

    Unset values (None or "") are never stored, so a key is present only when
    the field it represents has a value. Adding an unset value removes the key.
    """

    def __init__(self, pairs: Mapping[str, Any] | None = None) -> None:
        self._pairs: dict[str, Any] = {}
        if pairs:
            self.add_dict(pairs)

    def add_value(self, key: str, value: Any) -> None:
        if value is None or value == "":
            self._pairs.pop(key, None)
            return
        self._pairs[key] = value

    def add_dict(self, pairs: Mapping[str, Any]) -> None:
        for key, value in pairs.items():
            self.add_value(key, value)

    def get_as_dict(self) -> dict[str, Any]:
        return dict(self._pairs)

    def __getitem__(self, key: str) -> Any:
        return self._pairs[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"Payload({self._pairs!r})"
