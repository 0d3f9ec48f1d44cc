"""
Single-slot developer token cache.
"""

import threading
from typing import Optional

from pydantic import ValidationError

from shared.errors import MusicKitException
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..credentials import CredentialResolver
from ..signing import TokenIssuer


class TokenCache:
    """Holds at most one developer token for the lifetime of the instance.

    ``get_or_create`` never raises: any resolve or signing failure is logged and
    the placeholder token is cached instead. ``force_refresh`` always signs,
    raises on failure, and only overwrites the slot on success.
    """

    def __init__(
        self,
        resolver: Optional[CredentialResolver] = None,
        issuer: Optional[TokenIssuer] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.resolver = resolver or CredentialResolver()
        self.issuer = issuer or TokenIssuer()
        self.metrics = metrics
        self.logger = get_logger("musickit.cache")

        self._token: Optional[str] = None
        self._lock = threading.Lock()

    def peek(self) -> Optional[str]:
        """Return the cached token without resolving or signing."""
        return self._token

    @property
    def is_placeholder(self) -> bool:
        return self._token == self.issuer.placeholder()

    def get_or_create(self) -> str:
        """Return the cached token, signing one on first use."""
        token = self._token
        if token is not None:
            return token

        with self._lock:
            # Another caller may have populated the slot while we waited.
            if self._token is None:
                self._token = self._create()
            return self._token

    def force_refresh(self) -> str:
        """Sign a new token and replace the cached one.

        Raises:
            MusicKitException: configuration or signing failed; the cached
                token is left untouched.
        """
        try:
            token = self._sign()
        except MusicKitException as exc:
            self.logger.error(
                "Developer token refresh failed",
                code=exc.code,
                error=exc.message,
                details=exc.details,
            )
            raise

        with self._lock:
            self._token = token

        if self.metrics:
            self.metrics.record_token_issued("refresh")
        return token

    def is_configured(self) -> bool:
        """True when credentials resolve; nothing is signed or cached."""
        try:
            self.resolver.resolve()
        except (MusicKitException, ValidationError, OSError) as exc:
            self.logger.debug("MusicKit credentials not configured", error=str(exc))
            return False
        return True

    def _create(self) -> str:
        try:
            token = self._sign()
        except MusicKitException as exc:
            self.logger.warning(
                "Using placeholder developer token, music playback will not work",
                code=exc.code,
                error=exc.message,
                details=exc.details,
            )
            return self._fallback(exc.code)
        except Exception as exc:
            self.logger.error(
                "Unexpected error while signing developer token",
                error=str(exc),
                exc_info=True,
            )
            return self._fallback("UNEXPECTED_ERROR")

        if self.metrics:
            self.metrics.record_token_issued("get")
        return token

    def _fallback(self, code: str) -> str:
        if self.metrics:
            self.metrics.record_token_fallback(code)
        return self.issuer.placeholder()

    def _sign(self) -> str:
        credential = self.resolver.resolve()
        if self.metrics:
            with self.metrics.time_operation("developer_token_sign_duration_seconds"):
                return self.issuer.sign(credential)
        return self.issuer.sign(credential)
