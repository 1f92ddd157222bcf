"""Minimal request/response-like message carrying mutable headers.

Enough surface for ``ResponseCookies`` to bind to when no framework
object is at hand, plus adapters from ASGI scopes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

from crumbs.http.headers import MutableHeaders


@dataclass(slots=True)
class Message:
    """A request or response reduced to its headers.

    The headers object is shared, not copied: writes made through a
    ``ResponseCookies`` bound to this message are visible to whoever
    else holds it.
    """

    headers: MutableHeaders = field(default_factory=MutableHeaders)

    @classmethod
    def from_headers(
        cls, headers: Mapping[str, str] | Iterable[tuple[str, str]] = ()
    ) -> Message:
        """Build from a mapping or from ``(name, value)`` pairs."""
        return cls(headers=MutableHeaders(headers))

    @classmethod
    def from_scope(cls, scope: MutableMapping[str, Any]) -> Message:
        """Build from an ASGI HTTP scope's raw header list."""
        return cls(headers=MutableHeaders.from_raw(scope.get("headers", ())))

    def raw_headers(self) -> tuple[tuple[bytes, bytes], ...]:
        """Header byte pairs for an ASGI ``http.response.start`` message."""
        return self.headers.raw()
