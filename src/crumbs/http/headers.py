"""Mutable, case-insensitive HTTP headers.

Satisfies the ``HeaderStore`` protocol. Keeps every occurrence of a
header in arrival order so repeated ``Set-Cookie`` lines survive.
"""

from collections.abc import Iterable, Iterator, Mapping


def _sanitize(text: str) -> str:
    """Strip CR, LF and NUL to prevent header injection."""
    return text.replace("\r", "").replace("\n", "").replace("\x00", "")


class MutableHeaders:
    """Mutable, case-insensitive HTTP headers.

    ``get`` returns all values for a header joined with ``", "``, the way
    the Fetch ``Headers.get`` does. ``get_list`` returns the individual
    occurrences (e.g. multiple ``Set-Cookie``).
    """

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        self._items: list[tuple[str, str]] = []
        pairs = items.items() if isinstance(items, Mapping) else items
        for name, value in pairs:
            self.append(name, value)

    @classmethod
    def from_raw(cls, raw: Iterable[tuple[bytes, bytes]]) -> "MutableHeaders":
        """Build from ASGI-style raw byte pairs."""
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._items)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._items:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self.get(k)!r}" for k in self)
        return f"MutableHeaders({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return all values for *key* joined with ``", "``, or *default*."""
        values = self.get_list(key)
        if not values:
            return default
        return ", ".join(values)

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* in arrival order."""
        key_lower = key.lower()
        return [value for name, value in self._items if name.lower() == key_lower]

    def set(self, key: str, value: str) -> None:
        """Replace every occurrence of *key* with a single *value*."""
        self.delete(key)
        self.append(key, value)

    def append(self, key: str, value: str) -> None:
        """Add another occurrence of *key*."""
        self._items.append((_sanitize(key), _sanitize(value)))

    def delete(self, key: str) -> None:
        """Remove every occurrence of *key*. Missing keys are ignored."""
        key_lower = key.lower()
        self._items = [(name, value) for name, value in self._items if name.lower() != key_lower]

    def items(self) -> list[tuple[str, str]]:
        """Return every ``(name, value)`` occurrence in order."""
        return list(self._items)

    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Encode to raw header byte pairs for ASGI ``http.response.start``."""
        return tuple(
            (name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in self._items
        )
