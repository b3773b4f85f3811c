# MIT License (see LICENSE)
"""
Parallel-for over an index range.

ParallelFor splits range(n) into contiguous disjoint chunks and runs a
chunk function on each, returning only when every chunk has finished.
Chunk functions may read shared inputs but must write only to the output
slots of their own indices; nothing inside a chunk is synchronized.

Example:
    with ParallelFor(workers=4) as pfor:
        pfor(n, lambda start, stop: fill(out, start, stop))
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

ChunkFn = Callable[[int, int], None]


def partition(n: int, parts: int) -> list[range]:
    """
    Split range(n) into at most `parts` contiguous, non-empty chunks.

    Chunk sizes differ by at most one; earlier chunks get the remainder.
    """
    if n <= 0:
        return []
    parts = max(1, min(parts, n))
    size, extra = divmod(n, parts)
    chunks = []
    start = 0
    for k in range(parts):
        stop = start + size + (1 if k < extra else 0)
        chunks.append(range(start, stop))
        start = stop
    return chunks


class ParallelFor:
    """
    Reusable parallel-for backed by a thread pool.

    With workers <= 1 the chunk function runs inline on the calling
    thread and no pool is created.
    """

    def __init__(self, workers: int = 1) -> None:
        self.workers = max(1, int(workers))
        self._pool: ThreadPoolExecutor | None = None
        if self.workers > 1:
            self._pool = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="nbody-force"
            )

    def __call__(self, n: int, fn: ChunkFn) -> None:
        """
        Run fn(start, stop) over disjoint chunks covering range(n).

        Blocks until all chunks complete. An exception raised by any chunk
        is re-raised here after the remaining chunks have finished.
        """
        if n <= 0:
            return
        if self._pool is None or n == 1:
            fn(0, n)
            return
        futures = [
            self._pool.submit(fn, chunk.start, chunk.stop)
            for chunk in partition(n, self.workers)
        ]
        errors = [f.exception() for f in futures]
        for err in errors:
            if err is not None:
                raise err

    def close(self) -> None:
        """Shut the worker pool down."""
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self) -> "ParallelFor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
