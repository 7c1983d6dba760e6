"""OpenAI client with timing, retry logic, and call metrics."""

import logging
import time
from collections import defaultdict
from functools import lru_cache
from typing import Any

from openai import APIConnectionError, APITimeoutError, OpenAI, RateLimitError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.core.config import get_settings

logger = logging.getLogger(__name__)

# Retry configuration
MAX_RETRIES = 3
MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 10

# Latency thresholds for logging (milliseconds)
SLOW_CALL_THRESHOLD_MS = 2000
VERY_SLOW_CALL_THRESHOLD_MS = 5000

RETRYABLE_ERRORS = (APIConnectionError, APITimeoutError, RateLimitError)


class OpenAIMetrics:
    """Tracks OpenAI API call metrics for monitoring."""

    def __init__(self, max_samples: int = 500):
        self._samples: list[dict] = []
        self._max_samples = max_samples
        self._total_calls = 0
        self._total_errors = 0

    def record_call(
        self,
        operation: str,
        latency_ms: float,
        model: str,
        tokens_used: int | None = None,
        error: str | None = None,
    ) -> None:
        """Record an API call."""
        self._total_calls += 1
        if error:
            self._total_errors += 1

        self._samples.append(
            {
                "operation": operation,
                "latency_ms": round(latency_ms, 2),
                "model": model,
                "tokens_used": tokens_used,
                "error": error,
            }
        )
        if len(self._samples) > self._max_samples:
            self._samples = self._samples[-self._max_samples:]

    def get_stats(self) -> dict:
        """Get aggregated stats, with a per-operation breakdown."""
        if not self._samples:
            return {
                "total_calls": self._total_calls,
                "total_errors": self._total_errors,
                "avg_latency_ms": 0,
                "p95_latency_ms": 0,
                "by_operation": {},
            }

        latencies = sorted(s["latency_ms"] for s in self._samples)
        total = len(latencies)

        by_op: dict[str, list[float]] = defaultdict(list)
        for sample in self._samples:
            by_op[sample["operation"]].append(sample["latency_ms"])

        return {
            "total_calls": self._total_calls,
            "total_errors": self._total_errors,
            "avg_latency_ms": round(sum(latencies) / total, 2),
            "p95_latency_ms": round(latencies[min(int(total * 0.95), total - 1)], 2),
            "by_operation": {
                op: {"count": len(values), "avg_ms": round(sum(values) / len(values), 2)}
                for op, values in by_op.items()
            },
        }


# Global metrics instance
_openai_metrics: OpenAIMetrics | None = None


def get_openai_metrics() -> OpenAIMetrics:
    """Get or create the global OpenAI metrics instance."""
    global _openai_metrics
    if _openai_metrics is None:
        _openai_metrics = OpenAIMetrics()
    return _openai_metrics


class TimedChatCompletions:
    """Chat completions with timing and retry logic."""

    def __init__(self, completions: Any, metrics: OpenAIMetrics):
        self._completions = completions
        self._metrics = metrics

    @retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        stop=stop_after_attempt(MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS),
        reraise=True,
    )
    def _create_with_retry(self, **kwargs: Any) -> Any:
        """Create chat completion with retry logic."""
        return self._completions.create(**kwargs)

    def create(self, **kwargs: Any) -> Any:
        """Create a chat completion, retrying transient failures.

        Args:
            **kwargs: Arguments to pass to the OpenAI API.

        Returns:
            The chat completion response.
        """
        model = kwargs.get("model", "unknown")
        start_time = time.perf_counter()
        error_msg = None
        tokens_used = None

        try:
            response = self._create_with_retry(**kwargs)
            if getattr(response, "usage", None):
                tokens_used = response.usage.total_tokens
            return response

        except RETRYABLE_ERRORS as e:
            error_msg = f"{type(e).__name__}: {e}"
            logger.error("OpenAI chat completion failed after %d attempts: %s", MAX_RETRIES, error_msg)
            raise

        except Exception as e:
            error_msg = f"{type(e).__name__}: {e}"
            logger.error("OpenAI chat completion error: %s", error_msg)
            raise

        finally:
            latency_ms = (time.perf_counter() - start_time) * 1000
            self._metrics.record_call(
                operation="chat.completions.create",
                latency_ms=latency_ms,
                model=model,
                tokens_used=tokens_used,
                error=error_msg,
            )

            log_msg = (
                f"OpenAI chat completion: model={model}, "
                f"latency={latency_ms:.2f}ms, tokens={tokens_used or 'N/A'}"
            )
            if error_msg:
                logger.error(log_msg + f", error={error_msg}")
            elif latency_ms > VERY_SLOW_CALL_THRESHOLD_MS:
                logger.warning(f"VERY SLOW OpenAI call: {log_msg}")
            elif latency_ms > SLOW_CALL_THRESHOLD_MS:
                logger.warning(f"SLOW OpenAI call: {log_msg}")
            else:
                logger.info(log_msg)


class TimedOpenAIClient:
    """OpenAI client wrapper adding retries, latency logging and metrics."""

    def __init__(self, client: OpenAI):
        self._client = client
        self._metrics = get_openai_metrics()

    @property
    def chat(self) -> TimedChatCompletions:
        """Get the timed chat completions interface."""
        return TimedChatCompletions(self._client.chat.completions, self._metrics)


@lru_cache
def get_openai_client() -> TimedOpenAIClient:
    """Get cached OpenAI client singleton with timing and retry logic.

    Returns:
        TimedOpenAIClient: OpenAI client instance with performance monitoring.
    """
    settings = get_settings()
    return TimedOpenAIClient(OpenAI(api_key=settings.openai_api_key))
