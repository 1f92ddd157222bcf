"""Cookie handling configuration.

CookieConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """Cookie handling configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CookieConfig(default_path="/app")
    """

    # Path applied by ``set`` when the caller gives none
    default_path: str = "/"

    # Path applied to expiry markers written by ``delete`` / ``clear``
    expired_path: str = "/"

    # Tag marking a JSON-encoded structured value
    json_prefix: str = "j:"

    # Header names (matched case-insensitively by the header store)
    cookie_header: str = "cookie"
    set_cookie_header: str = "set-cookie"


DEFAULT_CONFIG = CookieConfig()
