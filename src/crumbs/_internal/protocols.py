"""Structural protocols for the objects crumbs binds to.

Any request/response object whose ``headers`` attribute offers
``get``/``set``/``append`` works, whether it is crumbs' own
``Message`` or a framework's response type.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class HeaderStore(Protocol):
    """A mutable, multi-valued header collection.

    ``get`` returns every occurrence of a header joined with ``", "``
    (or ``None`` when absent). ``set`` replaces all occurrences with
    one value; ``append`` adds another occurrence.
    """

    def get(self, key: str, default: str | None = None) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def append(self, key: str, value: str) -> None: ...


@runtime_checkable
class HasHeaders(Protocol):
    """A request/response-like object exposing a ``HeaderStore``."""

    @property
    def headers(self) -> HeaderStore: ...
