"""Domain layer package."""

from .models import (
    BatchRequest,
    BatchResult,
    FailurePolicy,
    ItemId,
    ItemPaths,
    ItemRange,
    OutputLayout,
    WorkerResult,
    identifier_width,
)
from .exceptions import (
    BatchError,
    ConfigurationError,
    ProducerNotFoundError,
    ConverterNotFoundError,
    ItemPipelineError,
    GenerationError,
    ConversionError,
    CleanupError,
)
from .protocols import IProducer, IConverter, ILogger, IMetricsCollector
from .planning import plan_ranges

__all__ = [
    # Models
    "BatchRequest",
    "BatchResult",
    "FailurePolicy",
    "ItemId",
    "ItemPaths",
    "ItemRange",
    "OutputLayout",
    "WorkerResult",
    "identifier_width",
    # Exceptions
    "BatchError",
    "ConfigurationError",
    "ProducerNotFoundError",
    "ConverterNotFoundError",
    "ItemPipelineError",
    "GenerationError",
    "ConversionError",
    "CleanupError",
    # Protocols
    "IProducer",
    "IConverter",
    "ILogger",
    "IMetricsCollector",
    # Planning
    "plan_ranges",
]
