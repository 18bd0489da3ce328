import logging
from typing import Callable, Iterable, Sequence, Tuple

from qbitless.external.result import CommandResult

logger = logging.getLogger(__name__)

MAX_HASHES_PER_REQUEST = 100

BatchMutation = Callable[[int, int], CommandResult]


def batch_ranges(count: int, size: int) -> Iterable[Tuple[int, int]]:
    """Yields [start, end) bounds covering range(count) in chunks of at most size."""
    if size <= 0:
        raise ValueError(f"batch size must be positive, got {size}")
    for start in range(0, count, size):
        yield start, min(start + size, count)


def count_batches(count: int, size: int = MAX_HASHES_PER_REQUEST) -> int:
    return sum(1 for _ in batch_ranges(count, size))


def batch_requests(
    items: Sequence[str],
    mutation: BatchMutation,
    size: int = MAX_HASHES_PER_REQUEST,
) -> CommandResult:
    """Applies mutation to consecutive slices of items, stopping at the first failure.

    Slices already applied are not rolled back. An empty sequence never calls mutation.
    """
    for start, end in batch_ranges(len(items), size):
        logger.debug(f"batch [{start}:{end}) of {len(items)}")
        result = mutation(start, end)
        if not result.success:
            logger.warning(f"batch [{start}:{end}) failed: {result.error}")
            return result
    return CommandResult()
