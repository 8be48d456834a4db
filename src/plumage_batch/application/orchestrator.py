"""Main orchestrator for batch image generation."""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from plumage_batch.domain.exceptions import ConfigurationError
from plumage_batch.domain.models import (
    BatchRequest, BatchResult, FailurePolicy, OutputLayout, WorkerResult
)
from plumage_batch.domain.planning import plan_ranges
from plumage_batch.domain.protocols import IProducer, IConverter, ILogger, IMetricsCollector
from plumage_batch.application.worker import RangeWorker, StdoutEmitter
from plumage_batch.shared.types import LineEmitter


class BatchOrchestrator:
    """Main orchestrator - plans the batch and runs one worker per range."""

    def __init__(
        self,
        producer: IProducer,
        converter: IConverter,
        logger: ILogger,
        metrics: IMetricsCollector,
        file_prefix: str = "out",
        intermediate_ext: str = "bmp",
        final_ext: str = "png",
        emit: Optional[LineEmitter] = None
    ):
        self._producer = producer
        self._converter = converter
        self._logger = logger
        self._metrics = metrics
        self._file_prefix = file_prefix
        self._intermediate_ext = intermediate_ext
        self._final_ext = final_ext
        self._emit = emit or StdoutEmitter()

    def run(self, request: BatchRequest) -> BatchResult:
        """
        Execute a batch.

        Blocks until every worker has finished, successfully or not.

        Raises:
            ConfigurationError: If the output directory cannot be created
        """
        self._logger.info(
            f"Generating {request.count} images in {request.output_dir} "
            f"with {request.parallelism} workers (on error: {request.policy.value})"
        )
        self._metrics.start_timer('batch')

        try:
            request.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create output directory {request.output_dir}: {e}")

        ranges = plan_ranges(request.count, request.parallelism)
        idle = sum(1 for item_range in ranges if item_range.is_empty)
        if idle:
            self._logger.warning(f"{idle} of {len(ranges)} workers have no items (count < parallelism)")
        for index, item_range in enumerate(ranges):
            self._logger.debug(f"Worker {index}: {item_range} ({len(item_range)} items)")

        layout = OutputLayout(
            output_dir=request.output_dir,
            prefix=self._file_prefix,
            intermediate_ext=self._intermediate_ext,
            final_ext=self._final_ext,
        )
        stop_event = threading.Event() if request.policy is FailurePolicy.ABORT else None
        worker = RangeWorker(
            producer=self._producer,
            converter=self._converter,
            layout=layout,
            width=request.width,
            emit=self._emit,
            metrics=self._metrics,
            stop_event=stop_event,
        )

        # Leaving the executor context is the join barrier
        with ThreadPoolExecutor(max_workers=len(ranges), thread_name_prefix="batch-worker") as pool:
            futures = [
                pool.submit(worker.run, index, item_range)
                for index, item_range in enumerate(ranges)
            ]
        workers = [self._collect(index, future, ranges[index]) for index, future in enumerate(futures)]

        duration = self._metrics.stop_timer('batch')
        result = BatchResult(
            request=request,
            workers=workers,
            duration_seconds=duration,
            metrics=self._metrics.get_summary(),
        )

        if result.success:
            self._logger.info(f"✅ Generated {result.completed_count} images in {duration:.1f}s")
        else:
            self._logger.error(
                f"❌ Generated {result.completed_count}/{request.count} images; "
                f"{len(result.failed_workers)} of {len(workers)} workers did not finish"
            )
            for error in result.errors:
                self._logger.error(f"  - {error}")

        self._logger.debug(f"Counters: {result.metrics['counters']}")

        return result

    def _collect(self, index, future, item_range) -> WorkerResult:
        """Turn an unexpected worker crash into a failed result."""
        error = future.exception()
        if error is None:
            return future.result()

        self._logger.error(f"Worker {index} crashed: {error!r}")
        return WorkerResult(
            worker_index=index,
            item_range=item_range,
            failed_stage="worker",
            error=repr(error),
        )
