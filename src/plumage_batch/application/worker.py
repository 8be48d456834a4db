"""Per-range item pipeline: generate, convert, delete, report."""

import sys
import threading
import time
from typing import Optional

from plumage_batch.domain.exceptions import CleanupError, ItemPipelineError
from plumage_batch.domain.models import ItemId, ItemRange, OutputLayout, WorkerResult
from plumage_batch.domain.protocols import IProducer, IConverter, IMetricsCollector
from plumage_batch.shared.logging import get_logger
from plumage_batch.shared.metrics import MetricsCollector
from plumage_batch.shared.types import LineEmitter

logger = get_logger(__name__)


class StdoutEmitter:
    """Writes each identifier as one flushed line; lines never interleave."""

    def __init__(self, stream=None):
        self._stream = stream
        self._lock = threading.Lock()

    def __call__(self, identifier: str) -> None:
        stream = self._stream or sys.stdout
        with self._lock:
            stream.write(f"{identifier}\n")
            stream.flush()


class RangeWorker:
    """
    Runs the item pipeline for every index of one range, in order.

    The worker stops at the first failing item and leaves that item's
    intermediate file where it is. When a stop event is shared between
    workers, a set event makes the worker stop before its next item.
    """

    def __init__(
        self,
        producer: IProducer,
        converter: IConverter,
        layout: OutputLayout,
        width: int,
        emit: LineEmitter,
        metrics: Optional[IMetricsCollector] = None,
        stop_event: Optional[threading.Event] = None
    ):
        self._producer = producer
        self._converter = converter
        self._layout = layout
        self._width = width
        self._emit = emit
        self._metrics = metrics or MetricsCollector()
        self._stop_event = stop_event
        self._logger = get_logger(__name__)

    def run(self, worker_index: int, item_range: ItemRange) -> WorkerResult:
        """
        Process ``item_range`` and report what happened.

        Args:
            worker_index: 0-based index used in logs and the result
            item_range: Inclusive range; an empty range returns at once

        Returns:
            WorkerResult with the completed identifiers and, on failure,
            the failing item, stage and error text
        """
        result = WorkerResult(worker_index=worker_index, item_range=item_range)

        if item_range.is_empty:
            self._logger.debug(f"Worker {worker_index}: empty range, nothing to do")
            return result

        self._logger.debug(f"Worker {worker_index}: items {item_range}")

        for index in item_range:
            if self._stop_event is not None and self._stop_event.is_set():
                result.skipped = item_range.end - index + 1
                self._metrics.increment_counter('items_skipped', result.skipped)
                self._logger.warning(
                    f"Worker {worker_index}: stopping, {result.skipped} items not started"
                )
                break

            item = ItemId(index, self._width)
            try:
                self.process_item(item)
            except ItemPipelineError as e:
                if self._stop_event is not None:
                    self._stop_event.set()
                result.failed_item = str(item)
                result.failed_stage = e.stage
                result.error = str(e)
                self._metrics.increment_counter('items_failed')
                remaining = item_range.end - index
                self._logger.error(
                    f"Worker {worker_index}: item {item} failed at {e.stage}: {e} "
                    f"({remaining} later items in range not produced)"
                )
                break
            except Exception as e:
                if self._stop_event is not None:
                    self._stop_event.set()
                result.failed_item = str(item)
                result.failed_stage = "worker"
                result.error = repr(e)
                self._metrics.increment_counter('items_failed')
                self._logger.exception(f"Worker {worker_index}: unexpected error on item {item}")
                break

            result.completed.append(str(item))

        return result

    def process_item(self, item: ItemId) -> None:
        """
        Generate, convert and clean up one item, then emit its identifier.

        Raises:
            ItemPipelineError: If any step fails
        """
        paths = self._layout.paths_for(item)
        start = time.time()

        try:
            intermediate = self._producer.generate(paths.stem)
            self._converter.convert(intermediate, paths.final)
            try:
                intermediate.unlink()
            except OSError as e:
                raise CleanupError(f"Failed to delete {intermediate}: {e}")
        except ItemPipelineError as e:
            e.item = str(item)
            raise

        self._metrics.record_metric('item_duration', time.time() - start)
        self._metrics.increment_counter('items_completed')
        self._emit(str(item))
