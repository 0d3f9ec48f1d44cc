"""
Base service class for the MusicKit token service.
"""

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST
from typing import Dict, Optional
import time
import os

from shared.config import get_config
from shared.logging import configure_logging, get_logger, set_request_id, get_request_id, clear_context
from shared.metrics import MetricsCollector, get_metrics_collector
from shared.errors import MusicKitException


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, service_name: str, port: Optional[int] = None, metrics: Optional[MetricsCollector] = None):
        self.service_name = service_name
        self.config = get_config(service_name, port)
        self.port = self.config.port
        self.logger = get_logger(service_name)
        self.metrics = metrics or get_metrics_collector(service_name)
        self._start_time = time.time()

        # Configure logging
        configure_logging(service_name, self.config.log_level)

        # Create FastAPI app
        self.app = self._create_app()

        # Set up middleware
        self._setup_middleware()

        # Set up routes
        self._setup_routes()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application."""
        return FastAPI(
            title=f"{self.service_name.title()} Service",
            description=f"{self.service_name.title()} developer token service",
            version="1.0.0",
            docs_url="/docs" if self.config.env == "local" else None,
            redoc_url="/redoc" if self.config.env == "local" else None,
        )

    def _setup_middleware(self):
        """Set up middleware."""

        # CORS middleware
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"] if self.config.env == "local" else [],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Request timing middleware
        @self.app.middleware("http")
        async def add_request_timing(request: Request, call_next):
            start_time = time.time()
            request_id = set_request_id(request.headers.get("X-Request-ID"))

            try:
                response = await call_next(request)

                duration = time.time() - start_time
                self.metrics.record_http_request(
                    method=request.method,
                    endpoint=request.url.path,
                    status_code=response.status_code,
                    duration=duration
                )
                self.logger.info(
                    "HTTP request",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration * 1000, 2)
                )

                response.headers["X-Request-ID"] = request_id
                return response
            finally:
                clear_context()

    def _setup_routes(self):
        """Set up common routes."""

        @self.app.get("/health")
        async def health_check():
            """Health check endpoint."""
            try:
                dependencies = await self._check_dependencies()
                self.metrics.record_health_check("ok")

                return {
                    "service": self.service_name,
                    "status": "ok",
                    "uptime_seconds": self._get_uptime(),
                    "dependencies": dependencies,
                    "version": "1.0.0",
                    "commit": os.getenv("GIT_COMMIT", "unknown")
                }
            except Exception as e:
                self.logger.error("Health check failed", error=str(e))
                self.metrics.record_health_check("error")
                return JSONResponse(
                    status_code=503,
                    content={
                        "service": self.service_name,
                        "status": "error",
                        "error": str(e)
                    }
                )

        @self.app.get("/metrics")
        async def metrics_endpoint():
            """Prometheus metrics endpoint."""
            return Response(
                content=self.metrics.render(),
                media_type=CONTENT_TYPE_LATEST
            )

        # Error handlers
        @self.app.exception_handler(MusicKitException)
        async def musickit_exception_handler(request: Request, exc: MusicKitException):
            """Handle MusicKitException."""
            self.logger.error(
                "Service error",
                code=exc.code,
                message=exc.message,
                details=exc.details
            )
            self.metrics.record_error(exc.code)
            body = exc.to_response(request_id=get_request_id())
            body.message = self._error_message(exc)
            return JSONResponse(
                status_code=self._error_status(exc),
                content=body.model_dump()
            )

        @self.app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle general exceptions."""
            self.logger.error("Unhandled exception", error=str(exc), exc_info=True)
            self.metrics.record_error("INTERNAL_ERROR")
            return JSONResponse(
                status_code=500,
                content={
                    "code": "INTERNAL_ERROR",
                    "message": "Internal server error",
                    "details": {}
                }
            )

    def _error_status(self, exc: MusicKitException) -> int:
        """HTTP status for a service error. Override in subclasses."""
        return 400

    def _error_message(self, exc: MusicKitException) -> str:
        """User-facing message for a service error. Override in subclasses."""
        return exc.message

    async def _check_dependencies(self) -> Dict[str, str]:
        """Check service dependencies. Override in subclasses."""
        return {}

    def _get_uptime(self) -> float:
        """Get service uptime in seconds."""
        return time.time() - self._start_time

    def run(self):
        """Run the service."""
        import uvicorn
        uvicorn.run(
            self.app,
            host=self.config.host,
            port=self.port,
            log_level=self.config.log_level.lower()
        )
