"""Cookie grammar: ``Cookie`` parsing and ``Set-Cookie`` fragments.

Consolidates the read side (parse_cookies, used by CookieJar) and the
write side (serialize_cookie / parse_set_cookie, used by CookieJar and
ResponseCookies) in one module. Everything here is a pure function over
strings, so the fragment written by ``set`` and the record read back by
``get_with_options`` always agree.
"""

import json
import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any
from urllib.parse import quote, unquote

logger = logging.getLogger("crumbs.cookies")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Characters encodeURIComponent leaves alone beyond quote()'s own safe set
_VALUE_SAFE = "!*'()"

# A new fragment starts wherever ", " is followed by ``name=``; the comma
# inside an Expires date ("Thu, 01 Jan 1970 ...") never matches.
_FRAGMENT_BOUNDARY = re.compile(r",\s*(?=[^;,=\s]+=)")

_SAMESITE = {"strict": "Strict", "lax": "Lax", "none": "None"}
_PRIORITY = {"low": "Low", "medium": "Medium", "high": "High"}
_FLAGS = {"httponly": "httponly", "secure": "secure", "partitioned": "partitioned"}


def _sanitize(text: str) -> str:
    return text.replace("\r", "").replace("\n", "").replace("\x00", "")


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Values are percent-decoded and may be wrapped in double quotes.
    Returns an empty dict for empty or missing headers. Pairs without
    ``=`` are skipped; a duplicate name keeps its last value.

    Raises:
        UnicodeDecodeError: a value percent-decodes to invalid UTF-8.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            cookies[key.strip()] = unquote(value, errors="strict")
    return cookies


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Caller-supplied ``Set-Cookie`` attributes.

    ``expires`` accepts a ``datetime`` (naive means UTC) or epoch
    seconds. ``samesite=True`` means ``Strict``.
    """

    domain: str | None = None
    path: str | None = None
    expires: datetime | float | None = None
    max_age: float | None = None
    httponly: bool = False
    secure: bool = False
    samesite: str | bool | None = None
    partitioned: bool = False
    priority: str | None = None


@dataclass(frozen=True, slots=True)
class Cookie:
    """A cookie as it will appear on the wire: name, value, attributes.

    ``value`` is ``None`` only for a cookie the jar does not hold.
    Attributes the parser does not recognise are kept in ``extras``.
    """

    name: str
    value: str | None = None
    domain: str | None = None
    path: str | None = None
    expires: datetime | None = None
    max_age: int | None = None
    httponly: bool = False
    secure: bool = False
    samesite: str | None = None
    partitioned: bool = False
    priority: str | None = None
    extras: dict[str, str] = field(default_factory=dict)

    def to_options(self) -> CookieOptions:
        """The attribute half of this cookie, ready to reserialize."""
        return CookieOptions(
            domain=self.domain,
            path=self.path,
            expires=self.expires,
            max_age=self.max_age,
            httponly=self.httponly,
            secure=self.secure,
            samesite=self.samesite,
            partitioned=self.partitioned,
            priority=self.priority,
        )

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        return serialize_cookie(self.name, self.value or "", self.to_options())


def normalize_options(
    options: CookieOptions,
    *,
    default_path: str = "/",
    now: datetime | None = None,
) -> CookieOptions:
    """Apply write-time defaults.

    A truthy ``max_age`` becomes an absolute ``expires`` of
    ``now + max_age`` (``max_age`` itself is kept). A missing path
    becomes *default_path*.
    """
    if options.max_age:
        now = now or datetime.now(timezone.utc)
        options = replace(options, expires=now + timedelta(seconds=options.max_age))
    if options.path is None:
        options = replace(options, path=default_path)
    return options


def serialize_value(value: object, prefix: str = "j:") -> str:
    """Stringify a cookie value.

    Strings pass through, booleans and numbers are stringified, and
    anything else is tagged with *prefix* and JSON-encoded.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return prefix + json.dumps(value, separators=(",", ":"), default=str)


def decode_value(raw: str | None, prefix: str = "j:") -> Any:
    """Reverse ``serialize_value`` for tagged values.

    A *prefix*-tagged value holding valid JSON decodes to the structured
    value; anything else comes back unchanged.
    """
    if raw is None or not raw.startswith(prefix):
        return raw
    try:
        return json.loads(raw[len(prefix) :])
    except ValueError:
        return raw


def _format_expires(expires: datetime | float) -> str:
    if not isinstance(expires, datetime):
        expires = datetime.fromtimestamp(expires, tz=timezone.utc)
    elif expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return format_datetime(expires.astimezone(timezone.utc), usegmt=True)


def serialize_cookie(name: str, value: str, options: CookieOptions | None = None) -> str:
    """Serialize one cookie into a ``Set-Cookie`` fragment.

    ``name=value[; Max-Age=..][; Domain=..][; Path=..][; Expires=..]``
    followed by the flags. The value is percent-encoded; names and
    attribute values are stripped of CR, LF and NUL.
    """
    options = options or CookieOptions()
    parts = [f"{_sanitize(name)}={quote(value, safe=_VALUE_SAFE)}"]
    if options.max_age is not None:
        parts.append(f"Max-Age={math.floor(options.max_age)}")
    if options.domain:
        parts.append(f"Domain={_sanitize(str(options.domain))}")
    if options.path:
        parts.append(f"Path={_sanitize(str(options.path))}")
    if options.expires is not None:
        parts.append(f"Expires={_format_expires(options.expires)}")
    if options.httponly:
        parts.append("HttpOnly")
    if options.secure:
        parts.append("Secure")
    if options.partitioned:
        parts.append("Partitioned")
    if options.priority:
        priority = _sanitize(str(options.priority))
        parts.append(f"Priority={_PRIORITY.get(priority.lower(), priority)}")
    if options.samesite is True:
        parts.append("SameSite=Strict")
    elif options.samesite:
        samesite = _sanitize(str(options.samesite))
        parts.append(f"SameSite={_SAMESITE.get(samesite.lower(), samesite)}")
    return "; ".join(parts)


def parse_set_cookie(fragment: str) -> Cookie:
    """Parse one ``Set-Cookie`` fragment back into a ``Cookie``.

    Attribute names match case-insensitively. Unknown attributes, and
    ``Expires`` / ``Max-Age`` values that do not parse, are kept
    verbatim in ``extras``.
    """
    head, *attributes = fragment.split(";")
    name, sep, value = head.partition("=")
    fields: dict[str, Any] = {}
    extras: dict[str, str] = {}

    for attribute in attributes:
        key, has_value, attr_value = attribute.strip().partition("=")
        key = key.strip()
        attr_value = attr_value.strip()
        if not key:
            continue
        lower = key.lower()
        if lower == "domain":
            fields["domain"] = attr_value
        elif lower == "path":
            fields["path"] = attr_value
        elif lower == "expires":
            try:
                fields["expires"] = parsedate_to_datetime(attr_value)
            except (TypeError, ValueError):
                logger.debug("Unparseable Expires %r in cookie %r", attr_value, name)
                extras[key] = attr_value
        elif lower == "max-age":
            try:
                fields["max_age"] = int(attr_value)
            except ValueError:
                extras[key] = attr_value
        elif lower == "samesite":
            fields["samesite"] = attr_value.lower()
        elif lower == "priority":
            fields["priority"] = attr_value.lower()
        elif lower in _FLAGS and not has_value:
            fields[_FLAGS[lower]] = True
        else:
            extras[key] = attr_value

    return Cookie(
        name=name.strip(),
        value=unquote(value.strip()) if sep else "",
        extras=extras,
        **fields,
    )


def serialize_expired_cookie(name: str, *, default_path: str = "/", **options: Any) -> str:
    """Build an expiry marker telling the client to drop *name*.

    Empty value, ``Expires`` at the epoch and *default_path*; caller
    options override those defaults. ``max_age`` is passed through as
    given, not converted into ``expires``.
    """
    merged = {"expires": EPOCH, "path": default_path, **options}
    return serialize_cookie(name, "", CookieOptions(**merged))


def split_set_cookie(header: str | None) -> list[str]:
    """Split a comma-joined ``Set-Cookie`` value into its fragments."""
    if not header:
        return []
    return [fragment.strip() for fragment in _FRAGMENT_BOUNDARY.split(header) if fragment.strip()]


def join_set_cookie(fragments: Iterable[str]) -> str:
    """Join fragments with ``", "``, skipping empty ones."""
    return ", ".join(fragment for fragment in fragments if fragment)
