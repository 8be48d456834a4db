"""Domain exceptions for the batch image pipeline."""

from typing import Optional


class BatchError(Exception):
    """Base exception for all batch errors."""
    pass


class ConfigurationError(BatchError):
    """Raised when configuration is invalid."""
    pass


class ProducerNotFoundError(ConfigurationError):
    """Raised when the image producer executable cannot be located."""
    pass


class ConverterNotFoundError(ConfigurationError):
    """Raised when the format converter is not installed."""
    pass


class ItemPipelineError(BatchError):
    """Raised when one step of an item's pipeline fails."""

    stage = "pipeline"

    def __init__(self, message: str, item: Optional[str] = None):
        super().__init__(message)
        self.item = item


class GenerationError(ItemPipelineError):
    """Raised when the producer fails to generate an image."""

    stage = "generate"


class ConversionError(ItemPipelineError):
    """Raised when the converter fails to transcode an image."""

    stage = "convert"


class CleanupError(ItemPipelineError):
    """Raised when the intermediate image cannot be removed."""

    stage = "cleanup"
