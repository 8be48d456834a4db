"""Splitting a batch into contiguous per-worker ranges."""

from typing import List

from plumage_batch.domain.models import ItemRange


def plan_ranges(count: int, parallelism: int) -> List[ItemRange]:
    """
    Partition ``[1, count]`` into ``parallelism`` contiguous ranges.

    The first ``count % parallelism`` ranges get one extra item, so range
    sizes differ by at most one. When ``parallelism > count`` the trailing
    ranges come out empty (``start == end + 1``).

    Args:
        count: Total number of items (>= 1)
        parallelism: Number of workers (>= 1)

    Returns:
        Ranges ordered by worker index

    Raises:
        ValueError: If count or parallelism is not positive
    """
    if count < 1:
        raise ValueError(f"Count must be at least 1, got: {count}")
    if parallelism < 1:
        raise ValueError(f"Parallelism must be at least 1, got: {parallelism}")

    base, extra = divmod(count, parallelism)

    ranges = []
    start = 1
    for worker in range(parallelism):
        size = base + (1 if worker < extra else 0)
        end = start + size
        ranges.append(ItemRange(start, end - 1))
        start = end

    return ranges
