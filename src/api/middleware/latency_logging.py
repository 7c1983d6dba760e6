"""Request latency logging middleware for performance monitoring."""

import logging
import re
import time
from collections import defaultdict
from typing import Callable

from fastapi import Request, Response

logger = logging.getLogger(__name__)

# Thresholds for log levels (in milliseconds)
SLOW_REQUEST_THRESHOLD_MS = 1000
VERY_SLOW_REQUEST_THRESHOLD_MS = 3000

HEALTH_PATHS = ("/health", "/health/ready")

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)


class LatencyStats:
    """In-memory stats tracker for request latencies, exposed on /health/stats."""

    def __init__(self, max_samples: int = 1000):
        self._samples: list[tuple[str, float]] = []
        self._max_samples = max_samples

    def record(self, path: str, latency_ms: float) -> None:
        """Record a latency sample."""
        self._samples.append((self._normalize_path(path), latency_ms))
        if len(self._samples) > self._max_samples:
            self._samples = self._samples[-self._max_samples:]

    def get_stats(self) -> dict:
        """Get aggregated stats."""
        if not self._samples:
            return {
                "total_requests": 0,
                "avg_latency_ms": 0,
                "p50_latency_ms": 0,
                "p95_latency_ms": 0,
                "by_path": {},
            }

        latencies = sorted(s[1] for s in self._samples)
        total = len(latencies)

        by_path: dict[str, list[float]] = defaultdict(list)
        for path, latency in self._samples:
            by_path[path].append(latency)

        return {
            "total_requests": total,
            "avg_latency_ms": round(sum(latencies) / total, 2),
            "p50_latency_ms": round(latencies[int(total * 0.5)], 2),
            "p95_latency_ms": round(latencies[min(int(total * 0.95), total - 1)], 2),
            "by_path": {
                path: {"count": len(values), "avg_ms": round(sum(values) / len(values), 2)}
                for path, values in by_path.items()
            },
        }

    @staticmethod
    def _normalize_path(path: str) -> str:
        """Replace UUIDs in a path with {id}."""
        return _UUID_PATTERN.sub("{id}", path)


# Global stats instance
_latency_stats: LatencyStats | None = None


def get_latency_stats() -> LatencyStats:
    """Get or create the global latency stats instance."""
    global _latency_stats
    if _latency_stats is None:
        _latency_stats = LatencyStats()
    return _latency_stats


async def latency_logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log request latency and record it for the stats endpoint.

    Slow requests and server errors are logged at elevated levels.
    Health checks are only logged at debug level.
    """
    start_time = time.perf_counter()

    method = request.method
    path = request.url.path
    is_health_check = path in HEALTH_PATHS

    response = None
    error_occurred = False

    try:
        response = await call_next(request)
        return response
    except Exception:
        error_occurred = True
        raise
    finally:
        latency_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code if response else 500
        log_msg = f"{method} {path} - {status_code} - {latency_ms:.2f}ms"

        if is_health_check:
            logger.debug(log_msg)
        else:
            get_latency_stats().record(path, latency_ms)

            if error_occurred or status_code >= 500:
                logger.error(log_msg)
            elif latency_ms > VERY_SLOW_REQUEST_THRESHOLD_MS:
                logger.error(f"VERY SLOW REQUEST: {log_msg}")
            elif latency_ms > SLOW_REQUEST_THRESHOLD_MS:
                logger.warning(f"SLOW REQUEST: {log_msg}")
            elif status_code >= 400:
                logger.warning(log_msg)
            else:
                logger.info(log_msg)
