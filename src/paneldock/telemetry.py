"""Telemetry - logging and metrics entry point

One logger factory and one metrics facade for the whole package.

Log format: [Component:panel] msg
Metric examples: queue.depth, queue.submitted, transition.ok/rejected,
transition.rollback, invariant.violation
"""

import logging

_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    return logger


def setup_logging(level: str | int | None = None) -> None:
    """Configure root logging for scripts and the demo.

    Args:
        level: Log level name or number, defaults to config.LOG_LEVEL
    """
    if level is None:
        from .config import LOG_LEVEL
        level = LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT)


class Metrics:
    """In-memory counters and gauges.

    Small facade that could be swapped for Prometheus/StatsD.
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """Increment a counter.

        Args:
            name: Metric name (e.g. "transition.ok")
            labels: Optional labels (e.g. {"panel": "scene"})
            value: Increment, default 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        """Set a gauge value."""
        key = self._make_key(name, labels)
        self._gauges[key] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        key = self._make_key(name, labels)
        return self._counters.get(key, 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        key = self._make_key(name, labels)
        return self._gauges.get(key, 0.0)

    def reset(self) -> None:
        """Reset everything (used by tests)."""
        self._counters.clear()
        self._gauges.clear()

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def get_all_counters(self) -> dict[str, int]:
        return dict(self._counters)

    def get_all_gauges(self) -> dict[str, float]:
        return dict(self._gauges)


# Global metrics instance
metrics = Metrics()
