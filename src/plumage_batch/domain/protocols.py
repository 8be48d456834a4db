"""Protocol definitions for dependency inversion."""

from pathlib import Path
from typing import Protocol


class IProducer(Protocol):
    """Interface for the external single-image generator."""

    def generate(self, stem: Path) -> Path:
        """Generate one image for ``stem`` and return the intermediate file."""
        ...


class IConverter(Protocol):
    """Interface for the external format converter."""

    def convert(self, source: Path, destination: Path) -> Path:
        """Transcode ``source`` into ``destination`` and return it."""
        ...


class ILogger(Protocol):
    """Interface for logging."""

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        ...


class IMetricsCollector(Protocol):
    """Interface for collecting metrics."""

    def start_timer(self, name: str) -> None:
        """Start a named timer."""
        ...

    def stop_timer(self, name: str) -> float:
        """Stop a named timer and return elapsed time."""
        ...

    def record_metric(self, name: str, value: float) -> None:
        """Record a metric value."""
        ...

    def increment_counter(self, name: str, amount: int = 1) -> None:
        """Increment a counter."""
        ...

    def get_summary(self) -> dict:
        """Get summary of all metrics."""
        ...
