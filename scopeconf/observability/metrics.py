"""Metrics collection for configuration loading."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class LoaderMetrics:
    """Metrics for configuration loading.

    Attributes:
        files_parsed: Number of configuration files read and parsed.
        loads_total: Number of scope loads attempted.
        load_failures_total: Number of scope loads that raised.
        load_duration_ms: Duration of the most recent load.
    """

    files_parsed: int = 0
    loads_total: int = 0
    load_failures_total: int = 0
    load_duration_ms: float = 0.0

    _instance: ClassVar["LoaderMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "LoaderMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_file_parsed(self) -> None:
        """Record a configuration file parsed."""
        self.files_parsed += 1

    def record_load(self, duration_ms: float, *, failed: bool = False) -> None:
        """Record a finished scope load.

        Args:
            duration_ms: Duration in milliseconds.
            failed: Whether the load raised.
        """
        self.loads_total += 1
        self.load_duration_ms = duration_ms
        if failed:
            self.load_failures_total += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "files_parsed": self.files_parsed,
            "loads_total": self.loads_total,
            "load_failures_total": self.load_failures_total,
            "load_duration_ms": self.load_duration_ms,
        }
