"""
Developer token commands consumed by the host UI layer.

Each command operates on the caller-owned :class:`TokenCache`. Errors stay
structured here; :func:`describe_error` produces the message shown to users.
"""

from shared.errors import ConfigMissingError, MusicKitException
from .cache import TokenCache


def get_developer_token(cache: TokenCache) -> str:
    """Return the cached developer token, possibly the placeholder."""
    return cache.get_or_create()


def refresh_developer_token(cache: TokenCache) -> str:
    """Re-sign the developer token; raises :class:`MusicKitException` on failure."""
    return cache.force_refresh()


def is_musickit_configured(cache: TokenCache) -> bool:
    return cache.is_configured()


def describe_error(exc: MusicKitException) -> str:
    """Human-readable message for a failed refresh."""
    if isinstance(exc, ConfigMissingError):
        return f"Configuration error: {exc.message}"
    return f"Failed to generate token: {exc.message}"
