"""Fork-join worker pool for recursive divide-and-conquer work.

A RecursiveAction either does its work directly or splits itself into
smaller actions and hands them to ForkJoinPool.invoke_all, which returns
only when every sub-action has completed.

The pool is backed by a concurrent.futures.ThreadPoolExecutor. A splitting
action never leaves a worker idle-blocked on work that nobody runs:
invoke_all forks all but the first sub-action to the executor, computes the
first one inline, then joins the forked ones. A forked action that no worker
has started yet is cancelled and computed inline by the joining thread, so
the join only ever waits on actions that are already running. This keeps
nested joins from starving the pool even with a single worker.

Example:
    >>> class Count(RecursiveAction):
    ...     def __init__(self, lo, hi, out):
    ...         self.lo, self.hi, self.out = lo, hi, out
    ...     def compute(self, pool):
    ...         if self.hi - self.lo <= 4:
    ...             for i in range(self.lo, self.hi):
    ...                 self.out[i] = i
    ...             return
    ...         mid = (self.lo + self.hi) // 2
    ...         pool.invoke_all(Count(self.lo, mid, self.out), Count(mid, self.hi, self.out))
    >>> out = [0] * 32
    >>> with ForkJoinPool() as pool:
    ...     pool.invoke(Count(0, 32, out))
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor

logger = logging.getLogger(__name__)


def default_parallelism() -> int:
    """Return the number of hardware threads, at least 1."""
    return os.cpu_count() or 1


class RecursiveAction:
    """A unit of work that may split itself into sub-actions.

    Subclasses implement compute(). Actions hold their inputs as plain
    attributes and write results into buffers they were given.
    """

    def compute(self, pool: "ForkJoinPool") -> None:
        """Do the work, possibly via pool.invoke_all on sub-actions."""
        raise NotImplementedError("compute() must be implemented by subclasses.")


class ForkJoinPool:
    """Worker pool that runs RecursiveAction trees to completion.

    Attributes:
        parallelism: Number of worker threads.
    """

    def __init__(self, parallelism: int | None = None) -> None:
        """Create the pool.

        Args:
            parallelism: Number of worker threads. Defaults to the number of
                hardware threads.

        Raises:
            ValueError: If parallelism is smaller than 1.
        """
        if parallelism is None:
            parallelism = default_parallelism()
        if parallelism < 1:
            raise ValueError(f"Parallelism must be at least 1, got {parallelism}")
        self._parallelism = parallelism
        self._executor = ThreadPoolExecutor(
            max_workers=parallelism,
            thread_name_prefix="forkjoin-worker",
        )
        logger.debug("Fork-join pool started with %d workers", parallelism)

    @property
    def parallelism(self) -> int:
        return self._parallelism

    def invoke(self, action: RecursiveAction) -> None:
        """Run action on the pool and block until it has completed.

        Any exception raised by the action, or by one of its sub-actions,
        is re-raised in the calling thread.
        """
        self._executor.submit(action.compute, self).result()

    def invoke_all(self, *actions: RecursiveAction) -> None:
        """Run all actions and return when every one has completed.

        Must be called from inside an action's compute(). The first action
        runs on the calling thread; the others are forked to the pool.
        """
        if not actions:
            return
        first, *rest = actions
        forked: list[tuple[RecursiveAction, Future]] = [
            (action, self._executor.submit(action.compute, self)) for action in rest
        ]
        try:
            first.compute(self)
        except BaseException:
            for _, future in forked:
                future.cancel()
            raise
        for action, future in forked:
            if future.cancel():
                # Nobody picked it up yet: run it here instead of waiting
                action.compute(self)
            else:
                future.result()

    def shutdown(self) -> None:
        """Stop accepting work and cancel queued actions without waiting.

        Actions already running are not interrupted. Worker threads still
        alive at interpreter exit are joined by concurrent.futures.
        """
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "ForkJoinPool":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
