"""Request URL parsing."""

from typing import Optional

from url_router.errors import InvalidURLError
from url_router.patterns import url_pattern


def normalize_path(path: str) -> str:
    """Return path with exactly one leading slash and no trailing slash."""
    return "/" + path.strip("/")


def _get_host(netloc: str) -> str:
    """Return host[:port], dropping any userinfo."""
    return netloc.rpartition("@")[2]


class RequestURL:
    """Split an absolute URL into authority and path."""

    def __init__(self, url: str):
        """Initialize request URL object."""
        match = url_pattern.match(url) if isinstance(url, str) else None
        if match is None:
            raise InvalidURLError(url)

        self.url = url
        self.scheme: str = match["scheme"]
        self.host: str = _get_host(match["netloc"])
        self.path: str = normalize_path(match["path"])
        self.query: Optional[str] = match["query"]
        self.fragment: Optional[str] = match["fragment"]

    @property
    def authority(self) -> str:
        """Return the ``scheme://host:port`` part matched by base templates."""
        return f"{self.scheme}://{self.host}"
