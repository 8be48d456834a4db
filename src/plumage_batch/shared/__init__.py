"""Shared utilities package."""

from plumage_batch.shared.logging import setup_logger, get_logger, LoggerAdapter
from plumage_batch.shared.metrics import MetricsCollector
from plumage_batch.shared.types import LineEmitter

__all__ = [
    "setup_logger",
    "get_logger",
    "LoggerAdapter",
    "MetricsCollector",
    "LineEmitter",
]
