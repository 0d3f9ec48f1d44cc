"""
Shared metrics configuration for the MusicKit token service.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry, generate_latest
from typing import Dict, Any, Optional
import time
from contextlib import contextmanager


class MetricsCollector:
    """Centralized metrics collector for services."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        # Service info
        self._metrics["service_info"] = Info(
            "service",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )

        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        # Health check metrics
        self._metrics["health_check_total"] = Counter(
            "health_check_total",
            "Total health check requests",
            ["status"],
            registry=self.registry
        )

        # Error metrics
        self._metrics["errors_total"] = Counter(
            "errors_total",
            "Total errors",
            ["error_type", "service"],
            registry=self.registry
        )

        self._setup_token_metrics()

    def _setup_token_metrics(self):
        """Set up developer-token metrics."""
        self._metrics["developer_tokens_issued_total"] = Counter(
            "developer_tokens_issued_total",
            "Total developer tokens signed",
            ["source"],
            registry=self.registry
        )

        self._metrics["developer_token_fallbacks_total"] = Counter(
            "developer_token_fallbacks_total",
            "Total placeholder substitutions",
            ["code"],
            registry=self.registry
        )

        self._metrics["developer_token_sign_duration_seconds"] = Histogram(
            "developer_token_sign_duration_seconds",
            "Developer token resolve and sign duration in seconds",
            registry=self.registry
        )

    def render(self) -> bytes:
        """Render the registry in Prometheus text format."""
        return generate_latest(self.registry)

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_health_check(self, status: str):
        """Record health check metrics."""
        self._metrics["health_check_total"].labels(status=status).inc()

    def record_error(self, error_type: str, service: Optional[str] = None):
        """Record error metrics."""
        service_name = service or self.service_name
        self._metrics["errors_total"].labels(error_type=error_type, service=service_name).inc()

    def record_token_issued(self, source: str):
        """Record a successfully signed developer token."""
        self._metrics["developer_tokens_issued_total"].labels(source=source).inc()

    def record_token_fallback(self, code: str):
        """Record a placeholder substitution."""
        self._metrics["developer_token_fallbacks_total"].labels(code=code).inc()

    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Context manager to time an operation."""
        start_time = time.time()
        try:
            yield
        finally:
            duration = time.time() - start_time
            metric = self._metrics.get(operation_name)
            if metric is not None:
                if labels:
                    metric = metric.labels(**labels)
                metric.observe(duration)


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
