"""Types that are needed for the Configuration classes."""

from __future__ import annotations

from urllib.parse import urlsplit

"""Token is not a different class, it is exactly the same as a str, this is only for code clarity."""
Token = str

DEFAULT_SCHEME = "https"


class Host:
    """The API endpoint of a Drogue Cloud instance, e.g. ``api.sandbox.drogue.cloud``."""

    def __init__(self, domain: str, scheme: str | None = None) -> None:
        self.domain = domain.rstrip("/")
        self.scheme = scheme or DEFAULT_SCHEME
        self.url = self.scheme + "://" + self.domain

    @classmethod
    def parse(cls, value: str) -> Host:
        """Creates a host from a domain or a full url like ``https://api.sandbox.drogue.cloud``."""
        if "://" not in value:
            return cls(value)
        parts = urlsplit(value)
        return cls(parts.netloc + parts.path, parts.scheme)

    def __repr__(self) -> str:
        return self.url

    def __eq__(self, o: Host | object):
        if isinstance(o, Host):
            return o.domain == self.domain and o.scheme == self.scheme
        return object.__eq__(self, o)

    def __hash__(self) -> int:
        return hash((self.domain, self.scheme))
