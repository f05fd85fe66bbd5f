"""Timing of B-tree operations."""

import time
import functools
from typing import Dict, List, Callable, Optional
from dataclasses import dataclass, field
import statistics
from collections import defaultdict

_ROW = "{:<40} {:>8} {:>12} {:>12} {:>12}"


@dataclass
class OperationMetrics:
    """Wall times of every recorded call of one tree operation."""
    times: List[float] = field(default_factory=list)

    def add_measurement(self, elapsed: float) -> None:
        self.times.append(elapsed)

    @property
    def call_count(self) -> int:
        return len(self.times)

    @property
    def total_time(self) -> float:
        return sum(self.times)

    @property
    def avg_time(self) -> float:
        return statistics.fmean(self.times) if self.times else 0

    @property
    def median_time(self) -> float:
        return statistics.median(self.times) if self.times else 0


class PerformanceTracker:
    """
    Process-wide collector for operation timings.

    Tracking is off until enable() is called, so the decorated hot paths
    cost a single flag check by default.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self):
        self.metrics: Dict[str, OperationMetrics] = defaultdict(OperationMetrics)
        self.enabled = False

    def add_measurement(self, name: str, elapsed: float) -> None:
        if self.enabled:
            self.metrics[name].add_measurement(elapsed)

    def reset(self) -> None:
        self.metrics.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self, sort_by: str = 'total_time') -> str:
        """Render the collected timings as a table, largest `sort_by` first."""
        if not self.metrics:
            return "No performance data collected."

        rule = "-" * 80
        lines = [
            "Performance Metrics:",
            rule,
            _ROW.format("Operation", "Calls", "Total (s)", "Avg (s)", "Median (s)"),
            rule,
        ]
        ranked = sorted(self.metrics.items(), key=lambda item: getattr(item[1], sort_by), reverse=True)
        for name, m in ranked:
            lines.append(_ROW.format(
                name, m.call_count,
                f"{m.total_time:.6f}", f"{m.avg_time:.6f}", f"{m.median_time:.6f}",
            ))
        return "\n".join(lines)


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Decorator recording the wall time of each call in the PerformanceTracker.

    Usable bare (@track_performance) or with a tag (@track_performance(tag="insert")).
    Calls that raise are recorded too.
    """
    def decorator(func):
        name = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                tracker.add_measurement(name, time.perf_counter() - start)
        return wrapper

    return decorator if method is None else decorator(method)
