"""Ordered cookie jar: cookie name -> serialized ``Set-Cookie`` fragment.

Seeded once from a request's ``Cookie`` header and lives as long as the
``ResponseCookies`` that owns it. The jar wraps a plain dict instead of
subclassing a mapping type, so nothing can store a value without going
through ``set`` and its serializer.
"""

import logging
from collections.abc import ItemsView, Iterator, KeysView, ValuesView
from datetime import datetime
from typing import Any

from crumbs.config import DEFAULT_CONFIG, CookieConfig
from crumbs.http.cookies import (
    CookieOptions,
    normalize_options,
    parse_cookies,
    serialize_cookie,
    serialize_value,
)

logger = logging.getLogger("crumbs.jar")


class CookieJar:
    """An insertion-ordered collection of cookie fragments.

    At most one entry per name; the entry always reflects the last
    ``set`` for that name. Cookies read from the request header are
    stored as attribute-less fragments (``name=value``).
    """

    __slots__ = ("_config", "_entries")

    def __init__(self, raw_cookie_header: str | None = None, *, config: CookieConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._entries: dict[str, str] = {}
        if raw_cookie_header is None:
            return
        if not isinstance(raw_cookie_header, str):
            logger.debug("Ignoring non-string Cookie header of type %s", type(raw_cookie_header).__name__)
            return
        try:
            parsed = parse_cookies(raw_cookie_header)
        except ValueError:
            logger.debug("Malformed Cookie header %r; starting with an empty jar", raw_cookie_header)
            return
        for name, value in parsed.items():
            self._entries[name] = serialize_cookie(name, value)

    @property
    def config(self) -> CookieConfig:
        return self._config

    def get(self, name: str) -> str | None:
        """Return the raw fragment stored for *name*, or ``None``."""
        return self._entries.get(name)

    def set(self, name: str, value: object, *, now: datetime | None = None, **options: Any) -> "CookieJar":
        """Serialize *value* with *options* and store it under *name*.

        ``max_age`` is turned into an absolute ``expires`` relative to
        *now* (default: the current UTC time) and a missing ``path``
        defaults to ``config.default_path``. Returns the jar.
        """
        normalized = normalize_options(
            CookieOptions(**options),
            default_path=self._config.default_path,
            now=now,
        )
        self._entries[name] = serialize_cookie(
            name,
            serialize_value(value, self._config.json_prefix),
            normalized,
        )
        return self

    def has(self, name: str) -> bool:
        return name in self._entries

    def delete(self, name: str) -> bool:
        """Remove *name*. Returns whether it was present."""
        return self._entries.pop(name, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def values(self) -> ValuesView[str]:
        return self._entries.values()

    def entries(self) -> ItemsView[str, str]:
        """``(name, fragment)`` pairs in insertion order."""
        return self._entries.items()

    items = entries

    def to_dict(self) -> dict[str, str]:
        """Snapshot of the jar for inspection and debugging."""
        return dict(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CookieJar({self._entries!r})"
