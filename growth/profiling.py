"""
Timing for the growth loop.

Off by default. Once enabled, `profile`-decorated functions are timed under
their qualified name and the scheduler times every callback it runs under
`tag:<task tag>`, so a report shows both the engine's hot path and where
the virtual clock's work goes per kind of task.
"""

import atexit
import time
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from typing import Dict


@dataclass
class CallStats:
    calls: int = 0
    total_s: float = 0.0
    max_s: float = 0.0

    def record(self, elapsed: float):
        self.calls += 1
        self.total_s += elapsed
        self.max_s = max(self.max_s, elapsed)

    @property
    def mean_ms(self) -> float:
        return self.total_s / self.calls * 1000 if self.calls else 0.0


class Profiler:
    def __init__(self):
        self.enabled = False
        self.stats: Dict[str, CallStats] = {}
        self._report_at_exit = False

    def enable(self, report_at_exit: bool = True):
        self.enabled = True
        if report_at_exit and not self._report_at_exit:
            atexit.register(self.report)
            self._report_at_exit = True

    def disable(self):
        self.enabled = False

    def reset(self):
        self.stats.clear()

    @contextmanager
    def timed(self, name: str):
        if not self.enabled:
            yield
            return
        start = time.perf_counter()
        try:
            yield
        finally:
            self.stats.setdefault(name, CallStats()).record(time.perf_counter() - start)

    def summary(self) -> Dict[str, dict]:
        """Per-name timings in milliseconds, slowest total first."""
        ordered = sorted(self.stats.items(), key=lambda item: item[1].total_s, reverse=True)
        return {
            name: {
                'calls': s.calls,
                'total_ms': s.total_s * 1000,
                'mean_ms': s.mean_ms,
                'max_ms': s.max_s * 1000,
            }
            for name, s in ordered
        }

    def report(self):
        summary = self.summary()
        if not summary:
            return
        print(f"\n{'Timed':<24} {'Calls':>9} {'Total(ms)':>11} {'Mean(ms)':>9} {'Max(ms)':>9}")
        for name, row in summary.items():
            print(f"{name:<24} {row['calls']:>9} {row['total_ms']:>11.1f} "
                  f"{row['mean_ms']:>9.3f} {row['max_ms']:>9.3f}")


profiler = Profiler()


def profile(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        with profiler.timed(func.__qualname__):
            return func(*args, **kwargs)
    return wrapper
