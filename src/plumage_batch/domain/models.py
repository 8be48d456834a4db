"""Domain models for batch image generation."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, Iterator, List


def identifier_width(count: int) -> int:
    """Number of decimal digits needed to print ``count``."""
    if count < 1:
        raise ValueError(f"Count must be positive, got: {count}")
    return len(str(count))


class FailurePolicy(str, Enum):
    """What the other workers do after one item fails."""

    CONTINUE = "continue"  # only the failing worker stops
    ABORT = "abort"        # every worker stops before its next item


@dataclass(frozen=True)
class BatchRequest:
    """A validated request to produce ``count`` images in ``output_dir``."""

    output_dir: Path
    count: int
    parallelism: int
    policy: FailurePolicy = FailurePolicy.CONTINUE

    def __post_init__(self):
        if self.count < 1:
            raise ValueError(f"Count must be at least 1, got: {self.count}")
        if self.parallelism < 1:
            raise ValueError(f"Parallelism must be at least 1, got: {self.parallelism}")

    @property
    def width(self) -> int:
        return identifier_width(self.count)


@dataclass(frozen=True, order=True)
class ItemId:
    """
    Zero-padded identifier of one item.

    The width is fixed for a whole batch; ``str()`` yields the padded text
    used in file names and completion output.
    """

    index: int
    width: int

    def __post_init__(self):
        if self.index < 1:
            raise ValueError(f"Item index must be positive, got: {self.index}")
        if self.width < len(str(self.index)):
            raise ValueError(f"Item index {self.index} does not fit in width {self.width}")

    def __str__(self) -> str:
        return str(self.index).zfill(self.width)


@dataclass(frozen=True)
class ItemRange:
    """Inclusive span of item indices assigned to one worker; empty when start > end."""

    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def __str__(self) -> str:
        if self.is_empty:
            return "[]"
        return f"[{self.start},{self.end}]"


@dataclass(frozen=True)
class ItemPaths:
    """File system locations for one item."""

    stem: Path
    intermediate: Path
    final: Path


@dataclass(frozen=True)
class OutputLayout:
    """Maps item identifiers to paths under the output directory."""

    output_dir: Path
    prefix: str = "out"
    intermediate_ext: str = "bmp"
    final_ext: str = "png"

    def paths_for(self, item: ItemId) -> ItemPaths:
        stem = self.output_dir / f"{self.prefix}{item}"
        return ItemPaths(
            stem=stem,
            intermediate=stem.with_name(f"{stem.name}.{self.intermediate_ext}"),
            final=stem.with_name(f"{stem.name}.{self.final_ext}"),
        )


@dataclass
class WorkerResult:
    """Outcome of one worker's range."""

    worker_index: int
    item_range: ItemRange
    completed: List[str] = field(default_factory=list)
    failed_item: Optional[str] = None
    failed_stage: Optional[str] = None
    error: Optional[str] = None
    skipped: int = 0

    @property
    def success(self) -> bool:
        return self.error is None and self.skipped == 0


@dataclass
class BatchResult:
    """Aggregate outcome of a batch run."""

    request: BatchRequest
    workers: List[WorkerResult] = field(default_factory=list)
    duration_seconds: float = 0.0
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return all(worker.success for worker in self.workers)

    @property
    def completed_count(self) -> int:
        return sum(len(worker.completed) for worker in self.workers)

    @property
    def failed_workers(self) -> List[WorkerResult]:
        return [worker for worker in self.workers if not worker.success]

    @property
    def errors(self) -> List[str]:
        errors = []
        for worker in self.workers:
            if worker.error:
                errors.append(
                    f"worker {worker.worker_index} item {worker.failed_item} "
                    f"({worker.failed_stage}): {worker.error}"
                )
        return errors
