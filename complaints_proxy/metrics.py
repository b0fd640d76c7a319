"""
Lightweight runtime metrics for the health endpoint.

Uses in-process counters so it works without extra dependencies.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Deque, Dict


class _RuntimeMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._upstream_calls = 0
        self._upstream_failures = 0
        self._fallback_responses = 0
        self._error_timestamps: Deque[float] = deque()

    def record_upstream_call(self, ok: bool) -> None:
        with self._lock:
            self._upstream_calls += 1
            if not ok:
                self._upstream_failures += 1

    def record_fallback(self) -> None:
        with self._lock:
            self._fallback_responses += 1

    def record_error(self, ts: float | None = None) -> None:
        now = ts if ts is not None else time.time()
        with self._lock:
            self._error_timestamps.append(now)
            self._prune_locked(now)

    def snapshot(self) -> Dict[str, int]:
        now = time.time()
        with self._lock:
            self._prune_locked(now)
            return {
                "upstream_calls": self._upstream_calls,
                "upstream_failures": self._upstream_failures,
                "fallback_responses": self._fallback_responses,
                "errors_last_hour": len(self._error_timestamps),
            }

    def reset_for_tests(self) -> None:
        with self._lock:
            self._upstream_calls = 0
            self._upstream_failures = 0
            self._fallback_responses = 0
            self._error_timestamps.clear()

    def _prune_locked(self, now: float) -> None:
        cutoff = now - 3600.0
        while self._error_timestamps and self._error_timestamps[0] < cutoff:
            self._error_timestamps.popleft()


_METRICS = _RuntimeMetrics()


def record_upstream_call(ok: bool) -> None:
    _METRICS.record_upstream_call(ok)


def record_fallback() -> None:
    _METRICS.record_fallback()


def record_error(ts: float | None = None) -> None:
    _METRICS.record_error(ts)


def metrics_snapshot() -> Dict[str, int]:
    return _METRICS.snapshot()


def reset_metrics_for_tests() -> None:
    _METRICS.reset_for_tests()
