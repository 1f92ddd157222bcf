"""Crumbs exception hierarchy.

Shared by the jar and the response sync layer so callers can catch
one base type.
"""


class CrumbsError(Exception):
    """Base for all crumbs-specific errors."""


class CookieInvariantError(CrumbsError):
    """Raised when the jar fails to produce a fragment it just stored.

    Never a user-facing condition: ``CookieJar.set`` is total, so this
    signals a broken jar and aborts the mutating call before the
    outgoing header is touched.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invariant: failed to generate cookie for {name!r}")
