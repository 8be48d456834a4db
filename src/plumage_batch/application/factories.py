"""Factory for wiring the batch collaborators from configuration."""

from typing import Optional

from plumage_batch.domain.exceptions import ConverterNotFoundError
from plumage_batch.infrastructure.config import BatchConfig
from plumage_batch.infrastructure.converters import ImageMagickConverter
from plumage_batch.infrastructure.producers import ProducerLocator, PlumageProducer
from plumage_batch.application.orchestrator import BatchOrchestrator
from plumage_batch.shared.logging import LoggerAdapter, get_logger
from plumage_batch.shared.metrics import MetricsCollector
from plumage_batch.shared.types import LineEmitter

logger = get_logger(__name__)


class CollaboratorFactory:
    """
    Creates the producer and converter for a run.

    Both are checked up front: a missing producer or converter is a
    configuration error raised before any worker starts.
    """

    def __init__(self, config: BatchConfig):
        self._config = config
        self._logger = get_logger(__name__)

    def create_producer(self) -> PlumageProducer:
        locator = ProducerLocator(
            program_name=self._config.producer_name,
            local_build_path=self._config.local_build_path,
            explicit_path=self._config.producer_path,
        )
        return PlumageProducer(locator.locate(), intermediate_ext=self._config.intermediate_ext)

    def create_converter(self) -> ImageMagickConverter:
        if not ImageMagickConverter.is_available(self._config.converter):
            raise ConverterNotFoundError(
                f"Could not find converter `{self._config.converter}` in $PATH"
            )
        self._logger.debug(f"Using converter: {self._config.converter}")
        return ImageMagickConverter(self._config.converter)


def create_orchestrator_from_config(
    config: BatchConfig,
    emit: Optional[LineEmitter] = None
) -> BatchOrchestrator:
    """Create orchestrator with all dependencies from config."""
    factory = CollaboratorFactory(config)
    producer = factory.create_producer()
    converter = factory.create_converter()

    return BatchOrchestrator(
        producer=producer,
        converter=converter,
        logger=LoggerAdapter(get_logger('plumage_batch.orchestrator')),
        metrics=MetricsCollector(),
        file_prefix=config.file_prefix,
        intermediate_ext=config.intermediate_ext,
        final_ext=config.final_ext,
        emit=emit,
    )
