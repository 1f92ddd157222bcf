"""Crumbs — request/response cookie state for Python HTTP code.

Parses the incoming ``Cookie`` header into an ordered jar and keeps the
outgoing ``Set-Cookie`` header in step with every change.

Basic usage::

    from crumbs import Message, ResponseCookies

    message = Message.from_headers({"cookie": "session=abc"})
    cookies = ResponseCookies(message)

    cookies.get("session")            # "abc"
    cookies.set("theme", "dark", max_age=3600)
    cookies.delete("session")

    message.headers.get("set-cookie")
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "Cookie",
    "CookieConfig",
    "CookieInvariantError",
    "CookieJar",
    "CookieOptions",
    "CrumbsError",
    "Message",
    "MutableHeaders",
    "ResponseCookies",
]

# Public name -> defining module, resolved on first attribute access
_LAZY_IMPORTS: dict[str, str] = {
    "Cookie": "crumbs.http.cookies",
    "CookieConfig": "crumbs.config",
    "CookieInvariantError": "crumbs.errors",
    "CookieJar": "crumbs.jar",
    "CookieOptions": "crumbs.http.cookies",
    "CrumbsError": "crumbs.errors",
    "Message": "crumbs.http.message",
    "MutableHeaders": "crumbs.http.headers",
    "ResponseCookies": "crumbs.sync",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import crumbs`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
