# MIT License (see LICENSE)
"""
Per-stage tick timing.

Simulation.step() wraps each stage (reset, integrate, build, query) in a
Profiler section when one is attached. benchmarks/bench_steps.py reads
the totals to show where a tick spends its time as N grows.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    sim.run(100)
    profiler.log_summary()
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class ProfileStats:
    """Raw durations in seconds, keyed by stage name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def clear(self) -> None:
        self.samples.clear()

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-stage totals, in insertion order of the first sample.

        Returns:
            {stage: {"n", "mean_ms", "max_ms", "total_ms"}}
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out


class Profiler:
    """
    Times named stages of the tick pipeline.

    A stage that raises is still recorded, then the exception propagates.
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    def section(self, name: str):
        """Context manager adding one sample to stage `name`."""
        stats = self.stats

        class _Section:
            def __enter__(self):
                self.t0 = time.perf_counter()
                return self

            def __exit__(self, exc_type, exc, tb):
                stats.add(name, time.perf_counter() - self.t0)
                return False

        return _Section()

    def log_summary(self, level: int = logging.INFO) -> None:
        """Log one line per stage."""
        for name, s in self.stats.summary().items():
            logger.log(
                level,
                "%-10s n=%d mean=%.3fms max=%.3fms total=%.1fms",
                name, s["n"], s["mean_ms"], s["max_ms"], s["total_ms"],
            )
