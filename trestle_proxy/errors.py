from typing import Optional


class ProxyError(Exception):
    """Base for upstream and lookup failures. `detail` holds the upstream body, for logs only."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail


class AuthError(ProxyError):
    """Token endpoint refused us or answered garbage."""


class UpstreamListingsError(ProxyError):
    """Listings endpoint failed, or pagination went off the rails."""


class UpstreamMediaError(ProxyError):
    """A media chunk failed; the whole batch is dropped."""


MediaFetchError = UpstreamMediaError


class NotFoundError(ProxyError):
    """No listing matches the requested id."""
