"""Producer package."""

from plumage_batch.infrastructure.producers.locator import ProducerLocator
from plumage_batch.infrastructure.producers.plumage import PlumageProducer

__all__ = ["ProducerLocator", "PlumageProducer"]
