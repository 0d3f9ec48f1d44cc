"""
MusicKit developer token service.
"""

from typing import Optional

from fastapi.concurrency import run_in_threadpool

from shared.base_service import BaseService
from shared.errors import ConfigMissingError, MusicKitException
from shared.metrics import MetricsCollector
from .cache import TokenCache
from .commands import (
    describe_error,
    get_developer_token,
    is_musickit_configured,
    refresh_developer_token,
)


class MusicKitService(BaseService):
    """Serves developer tokens to the desktop UI."""

    def __init__(
        self,
        token_cache: Optional[TokenCache] = None,
        port: Optional[int] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        super().__init__("musickit", port, metrics=metrics)
        self.token_cache = token_cache or TokenCache(metrics=self.metrics)
        if self.token_cache.metrics is None:
            self.token_cache.metrics = self.metrics

        self._setup_token_routes()

    def _setup_token_routes(self):
        """Set up developer token routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "musickit",
                "message": "MusicKit Developer Token Service",
                "version": "1.0.0"
            }

        @self.app.get("/musickit/token")
        def developer_token():
            """Return the cached developer token, signing one on first use."""
            token = get_developer_token(self.token_cache)
            return {
                "token": token,
                "placeholder": self.token_cache.is_placeholder
            }

        @self.app.post("/musickit/token/refresh")
        def refresh_token():
            """Force a newly signed developer token."""
            return {"token": refresh_developer_token(self.token_cache)}

        @self.app.get("/musickit/configured")
        def configured():
            """Report whether signing credentials are configured."""
            return {"configured": is_musickit_configured(self.token_cache)}

    def _error_status(self, exc: MusicKitException) -> int:
        if isinstance(exc, ConfigMissingError):
            return 400
        return 500

    def _error_message(self, exc: MusicKitException) -> str:
        return describe_error(exc)

    async def _check_dependencies(self):
        """Report credential configuration state."""
        configured = await run_in_threadpool(is_musickit_configured, self.token_cache)
        return {"musickit": "configured" if configured else "unconfigured"}


def create_app(token_cache: Optional[TokenCache] = None):
    """Create FastAPI application."""
    service = MusicKitService(token_cache=token_cache)
    return service.app


if __name__ == "__main__":
    service = MusicKitService()
    service.run()
