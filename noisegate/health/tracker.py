"""
HealthTracker: per-upstream, per-method request and failure counters.

Before a failure is counted, the upstream is asked whether the error is one
its operators chose to ignore. Ignored errors are tallied separately and never
reach errors_total, so they do not move the error rate.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import structlog
from beartype import beartype

_structlog_logger: structlog.stdlib.BoundLogger = structlog.get_logger()


@runtime_checkable
class TrackedUpstream(Protocol):
    """What the tracker needs from an upstream."""

    @property
    def id(self) -> str: ...  # pragma: no cover

    def should_ignore_error(self, err: BaseException | None) -> bool: ...  # pragma: no cover


@dataclass
class MethodMetrics:
    requests_total: int = 0
    errors_total: int = 0
    ignored_errors_total: int = 0

    @property
    def error_rate(self) -> float:
        if self.requests_total == 0:
            return 0.0
        return self.errors_total / self.requests_total


class HealthTracker:
    """Thread-safe counters keyed by (upstream id, method)."""

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        self._metrics: dict[tuple[str, str], MethodMetrics] = {}
        self._lock = threading.Lock()

    def _get(self, upstream_id: str, method: str) -> MethodMetrics:
        key = (upstream_id, method)
        metrics = self._metrics.get(key)
        if metrics is None:
            metrics = self._metrics.setdefault(key, MethodMetrics())
        return metrics

    @beartype
    def record_upstream_request(self, upstream: TrackedUpstream, method: str) -> None:
        with self._lock:
            self._get(upstream.id, method).requests_total += 1

    @beartype
    def record_upstream_failure(self, upstream: TrackedUpstream, method: str, err: BaseException | None) -> bool:
        """
        Count err as a failure unless the upstream ignores it.

        Returns True if the failure was recorded, False if it was ignored.
        """
        if upstream.should_ignore_error(err):
            with self._lock:
                self._get(upstream.id, method).ignored_errors_total += 1
            _structlog_logger.debug(
                "upstream_error_ignored",
                project_id=self.project_id,
                upstream_id=upstream.id,
                method=method,
                error=str(err),
            )
            return False

        with self._lock:
            self._get(upstream.id, method).errors_total += 1
        return True

    @beartype
    def get_upstream_method_metrics(self, upstream: TrackedUpstream, method: str) -> MethodMetrics:
        """Return a snapshot of the counters for one upstream and method."""
        with self._lock:
            current = self._metrics.get((upstream.id, method), MethodMetrics())
            return MethodMetrics(
                requests_total=current.requests_total,
                errors_total=current.errors_total,
                ignored_errors_total=current.ignored_errors_total,
            )

    @beartype
    def error_rate(self, upstream: TrackedUpstream, method: str) -> float:
        return self.get_upstream_method_metrics(upstream, method).error_rate

    def reset(self) -> None:
        with self._lock:
            self._metrics.clear()
