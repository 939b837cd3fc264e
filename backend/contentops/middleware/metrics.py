"""Prometheus-format metrics endpoint and request tracking middleware.

Tracks: request count, latency, active requests, error rate, and the
volume of CSV rows pushed through the analytics aggregator.
"""
import time
import logging
from collections import defaultdict

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)

_metrics: dict[str, float] = defaultdict(float)
_durations: list[float] = []
_MAX_SAMPLES = 10_000


def record_aggregation(rows_processed: int, rows_skipped: int) -> None:
    """Count one aggregation run over a workspace's reports."""
    _metrics["analytics_aggregations_total"] += 1
    _metrics["analytics_rows_processed_total"] += rows_processed
    _metrics["analytics_rows_skipped_total"] += rows_skipped


class MetricsMiddleware(BaseHTTPMiddleware):
    """Track request metrics."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        _metrics["http_requests_active"] += 1

        try:
            response = await call_next(request)
            status = response.status_code
        except Exception:
            status = 500
            _metrics["http_requests_errors_total"] += 1
            raise
        finally:
            duration = time.perf_counter() - start
            _metrics["http_requests_active"] -= 1
            _metrics["http_requests_total"] += 1
            _metrics[f"http_requests_by_status_{status // 100}xx"] += 1
            _durations.append(duration)
            if len(_durations) > _MAX_SAMPLES:
                del _durations[: len(_durations) - _MAX_SAMPLES]

            if duration > 0.5:
                logger.warning("slow_request", extra={
                    "method": request.method, "path": request.url.path,
                    "duration_ms": round(duration * 1000, 2),
                    "status": status,
                })

        return response


def _percentile(data: list[float], p: float) -> float:
    if not data:
        return 0.0
    sorted_data = sorted(data)
    idx = int(len(sorted_data) * p / 100)
    return sorted_data[min(idx, len(sorted_data) - 1)]


def _counter(name: str, help_text: str, kind: str = "counter") -> list[str]:
    return [f"# HELP {name} {help_text}", f"# TYPE {name} {kind}", f"{name} {_metrics[name]:.0f}", ""]


def setup_metrics(app: FastAPI) -> None:
    """Register the /metrics endpoint."""

    @app.get("/metrics", tags=["monitoring"], include_in_schema=False)
    async def metrics_endpoint():
        lines = [
            *_counter("http_requests_total", "Total HTTP requests"),
            *_counter("http_requests_active", "Active HTTP requests", "gauge"),
            *_counter("http_requests_errors_total", "Total HTTP errors"),
            "# HELP http_request_duration_seconds Request duration",
            "# TYPE http_request_duration_seconds summary",
        ]
        for quantile in (50, 90, 95, 99):
            lines.append(
                f'http_request_duration_seconds{{quantile="{quantile / 100}"}} {_percentile(_durations, quantile):.6f}'
            )
        lines += [f"http_request_duration_seconds_count {len(_durations)}", ""]
        lines += ["# HELP http_requests_by_status HTTP requests by status class",
                  "# TYPE http_requests_by_status counter"]
        for status_class in ("2xx", "3xx", "4xx", "5xx"):
            lines.append(
                f'http_requests_by_status{{status="{status_class}"}} {_metrics[f"http_requests_by_status_{status_class}"]:.0f}'
            )
        lines.append("")
        lines += _counter("analytics_aggregations_total", "Aggregation runs over uploaded reports")
        lines += _counter("analytics_rows_processed_total", "CSV rows resolved by the aggregator")
        lines += _counter("analytics_rows_skipped_total", "Malformed CSV rows skipped by the aggregator")
        return PlainTextResponse("\n".join(lines), media_type="text/plain")
