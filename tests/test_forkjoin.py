"""Tests for the fork-join worker pool.

Tests cover:
- Recursive actions completing on pools of different sizes
- Nested joins on a single worker
- Exception propagation to the caller of invoke
- Pool configuration errors
"""

import threading

import pytest

from src.pixelworks.core.forkjoin import ForkJoinPool, RecursiveAction, default_parallelism


class FillAction(RecursiveAction):
    """Writes out[i] = i for its range, halving until at most `leaf` items."""

    def __init__(self, lo, hi, out, leaf=4, seen_threads=None):
        self.lo = lo
        self.hi = hi
        self.out = out
        self.leaf = leaf
        self.seen_threads = seen_threads

    def compute(self, pool):
        if self.hi - self.lo <= self.leaf:
            for i in range(self.lo, self.hi):
                self.out[i] = i
            if self.seen_threads is not None:
                self.seen_threads.add(threading.current_thread().name)
            return
        mid = (self.lo + self.hi) // 2
        pool.invoke_all(
            FillAction(self.lo, mid, self.out, self.leaf, self.seen_threads),
            FillAction(mid, self.hi, self.out, self.leaf, self.seen_threads),
        )


class FailingAction(RecursiveAction):
    """Splits once into a no-op leaf and a failing leaf."""

    def __init__(self, role="root"):
        self.role = role

    def compute(self, pool):
        if self.role == "fail":
            raise RuntimeError("leaf failed")
        if self.role == "root":
            pool.invoke_all(FailingAction("ok"), FailingAction("fail"))


class NoopAction(RecursiveAction):
    def compute(self, pool):
        pass


class TestForkJoinPool:
    """Tests for running action trees."""

    @pytest.mark.parametrize("parallelism", [1, 2, 4, 8])
    def test_every_leaf_runs_once(self, parallelism):
        """Test all leaves complete before invoke returns."""
        out = [-1] * 1000

        with ForkJoinPool(parallelism) as pool:
            pool.invoke(FillAction(0, len(out), out))

        assert out == list(range(1000))

    def test_single_worker_deep_nesting(self):
        """Test nested joins cannot starve a one-thread pool."""
        out = [-1] * 4096

        with ForkJoinPool(1) as pool:
            pool.invoke(FillAction(0, len(out), out, leaf=1))

        assert out == list(range(4096))

    def test_work_runs_on_pool_threads(self):
        """Test leaves run on the pool's worker threads, not the caller."""
        seen = set()
        out = [-1] * 256

        with ForkJoinPool(2) as pool:
            pool.invoke(FillAction(0, len(out), out, seen_threads=seen))

        assert seen
        assert threading.current_thread().name not in seen
        assert all(name.startswith("forkjoin-worker") for name in seen)

    @pytest.mark.parametrize("parallelism", [1, 3])
    def test_exception_propagates(self, parallelism):
        """Test a failing sub-action surfaces from invoke."""
        with ForkJoinPool(parallelism) as pool:
            with pytest.raises(RuntimeError, match="leaf failed"):
                pool.invoke(FailingAction())

    def test_invoke_all_without_actions(self):
        """Test invoke_all with nothing to do returns immediately."""
        with ForkJoinPool(1) as pool:
            pool.invoke_all()

    def test_shutdown_rejects_new_work(self):
        """Test a shut-down pool refuses further actions without blocking."""
        pool = ForkJoinPool(2)
        pool.invoke(NoopAction())
        pool.shutdown()

        with pytest.raises(RuntimeError):
            pool.invoke(NoopAction())

    def test_base_action_is_abstract(self):
        """Test the base class must be subclassed."""
        with ForkJoinPool(1) as pool:
            with pytest.raises(NotImplementedError):
                pool.invoke(RecursiveAction())


class TestForkJoinConfiguration:
    """Tests for pool sizing."""

    def test_default_parallelism(self):
        """Test the default matches the hardware thread count."""
        assert default_parallelism() >= 1
        with ForkJoinPool() as pool:
            assert pool.parallelism == default_parallelism()
            pool.invoke(NoopAction())

    def test_explicit_parallelism(self):
        """Test an explicit worker count is kept."""
        with ForkJoinPool(3) as pool:
            assert pool.parallelism == 3

    @pytest.mark.parametrize("parallelism", [0, -2])
    def test_invalid_parallelism(self, parallelism):
        """Test fewer than one worker is rejected."""
        with pytest.raises(ValueError, match="at least 1"):
            ForkJoinPool(parallelism)
