"""Infrastructure layer package."""

from plumage_batch.infrastructure.config import ConfigLoader, BatchConfig
from plumage_batch.infrastructure.producers import ProducerLocator, PlumageProducer
from plumage_batch.infrastructure.converters import ImageMagickConverter

__all__ = [
    "ConfigLoader",
    "BatchConfig",
    "ProducerLocator",
    "PlumageProducer",
    "ImageMagickConverter",
]
