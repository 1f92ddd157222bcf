"""Response-bound cookies: every jar mutation also rewrites ``Set-Cookie``.

``ResponseCookies`` owns a ``CookieJar`` seeded from the bound object's
``Cookie`` header and keeps the object's outgoing ``Set-Cookie`` header
in step with it. Fragments written by other code for other cookie names
are carried over untouched.

Not thread-safe: one instance serves one request/response lifecycle on
one execution context. Concurrent mutation is the caller's problem.
"""

import logging
from collections.abc import Iterator, KeysView
from dataclasses import replace
from typing import Any

from crumbs._internal.protocols import HasHeaders
from crumbs.config import DEFAULT_CONFIG, CookieConfig
from crumbs.errors import CookieInvariantError
from crumbs.http.cookies import (
    Cookie,
    decode_value,
    join_set_cookie,
    parse_set_cookie,
    serialize_expired_cookie,
    split_set_cookie,
)
from crumbs.jar import CookieJar

logger = logging.getLogger("crumbs.sync")


class ResponseCookies:
    """Cookie jar bound to a live request/response object.

    The object is referenced, not owned; it outlives this wrapper.
    Reads go through the jar's serialized fragments, so what ``get``
    reports always matches what goes on the wire::

        cookies = ResponseCookies(response)
        cookies.set("theme", "dark", max_age=3600)
        cookies.delete("session")
    """

    __slots__ = ("_config", "_jar", "response")

    def __init__(self, response: HasHeaders, *, config: CookieConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self.response = response
        self._jar = CookieJar(
            response.headers.get(self._config.cookie_header),
            config=self._config,
        )

    @property
    def jar(self) -> CookieJar:
        return self._jar

    # -- Reads --

    def get(self, name: str) -> str | None:
        """The decoded value of *name*, or ``None`` when absent."""
        return self.get_with_options(name).value

    def get_with_options(self, name: str) -> Cookie:
        """The full attribute record of *name* as it will be emitted."""
        raw = self._jar.get(name)
        if raw is None:
            return Cookie(name=name, value=None)
        cookie = parse_set_cookie(raw)
        if cookie.name != name:
            cookie = replace(cookie, name=name)
        return cookie

    def get_all(self) -> list[Cookie]:
        return [self.get_with_options(name) for name in self._jar.keys()]

    def get_json(self, name: str) -> Any:
        """Like ``get``, but decodes ``j:``-tagged structured values."""
        return decode_value(self.get(name), self._config.json_prefix)

    def has(self, name: str) -> bool:
        return self._jar.has(name)

    def keys(self) -> KeysView[str]:
        return self._jar.keys()

    def __contains__(self, name: object) -> bool:
        return name in self._jar

    def __iter__(self) -> Iterator[str]:
        return iter(self._jar)

    def __len__(self) -> int:
        return len(self._jar)

    def __repr__(self) -> str:
        return f"ResponseCookies({self._jar.to_dict()!r})"

    # -- Mutations --

    def set(self, name: str, value: object, **options: Any) -> "ResponseCookies":
        """Store *name* and write its fragment into ``Set-Cookie``.

        Replaces the header when an older fragment for *name* has to be
        evicted (the jar already held it, or other code wrote one);
        otherwise appends the fragment as a new header occurrence.

        Raises:
            CookieInvariantError: the jar produced no fragment for *name*.
        """
        already_present = self._jar.has(name)
        self._jar.set(name, value, **options)
        fragment = self._jar.get(name)
        if fragment is None:
            raise CookieInvariantError(name)

        existing = self._read_set_cookie()
        others = _without(existing, name)
        header = self._config.set_cookie_header

        if already_present or len(others) != len(existing):
            self.response.headers.set(header, join_set_cookie([fragment, *others]))
            logger.debug("Replaced Set-Cookie fragment for %r", name)
        else:
            self.response.headers.append(header, fragment)
            logger.debug("Appended Set-Cookie fragment for %r", name)
        return self

    def delete(self, name: str, **options: Any) -> bool:
        """Expire *name* on the client. Returns whether the jar held it.

        A ``False`` return leaves the header untouched.
        """
        if not self._jar.has(name):
            return False
        expired = serialize_expired_cookie(name, default_path=self._config.expired_path, **options)
        others = _without(self._read_set_cookie(), name)
        self._jar.delete(name)
        self.response.headers.set(self._config.set_cookie_header, join_set_cookie([expired, *others]))
        logger.debug("Wrote expiry marker for %r", name)
        return True

    def clear(self, **options: Any) -> None:
        """Expire every cookie the jar holds and empty it.

        The expiry markers replace the whole ``Set-Cookie`` header,
        including fragments written by other code. An empty jar writes
        nothing.
        """
        expired = [
            serialize_expired_cookie(name, default_path=self._config.expired_path, **options)
            for name in self._jar.keys()
        ]
        if expired:
            self.response.headers.set(self._config.set_cookie_header, join_set_cookie(expired))
            logger.debug("Cleared %d cookie(s)", len(expired))
        self._jar.clear()

    def _read_set_cookie(self) -> list[str]:
        return split_set_cookie(self.response.headers.get(self._config.set_cookie_header))


def _without(fragments: list[str], name: str) -> list[str]:
    prefix = f"{name}="
    return [fragment for fragment in fragments if not fragment.startswith(prefix)]
