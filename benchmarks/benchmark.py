"""
Benchmarks comparing lazyseq with plain generator pipelines.

Run with:
    python benchmarks/benchmark.py

Each lazyseq pipeline is rebuilt from its sequence value on every run,
while the generator version is rebuilt by hand, so both do the same work.
"""

import itertools
import time
from collections.abc import Callable
from typing import Any

from lazyseq import count

# ---------------------------------------------------------------------------
# Module-level worker functions
# ---------------------------------------------------------------------------


def _square(x: int) -> int:
    return x * x


def _double(x: int) -> int:
    return x * 2


def _increment(x: int) -> int:
    return x + 1


def _is_even(x: int) -> bool:
    return x % 2 == 0


def _divisible_by_3(x: int) -> bool:
    return x % 3 == 0


# ---------------------------------------------------------------------------
# Benchmark harness
# ---------------------------------------------------------------------------


def benchmark(
    name: str,
    lazy_fn: Callable[[], Any],
    generator_fn: Callable[[], Any],
    iterations: int = 3,
):
    """
    Benchmark a lazyseq function against its generator equivalent.

    Args:
        name: Name of the benchmark
        lazy_fn: Function using lazyseq
        generator_fn: Function using itertools and generators
        iterations: Number of times to run each function
    """
    print(f"\n{'=' * 60}")
    print(f"Benchmark: {name}")
    print(f"{'=' * 60}")

    # Warm-up
    lazy_result = lazy_fn()
    generator_result = generator_fn()
    assert lazy_result == generator_result, name

    lazy_times = []
    for _ in range(iterations):
        start = time.perf_counter()
        lazy_fn()
        lazy_times.append(time.perf_counter() - start)

    generator_times = []
    for _ in range(iterations):
        start = time.perf_counter()
        generator_fn()
        generator_times.append(time.perf_counter() - start)

    avg_lazy = sum(lazy_times) / len(lazy_times)
    avg_generator = sum(generator_times) / len(generator_times)
    overhead = avg_lazy / avg_generator

    print(f"lazyseq (avg):    {avg_lazy:.4f} seconds")
    print(f"Generator (avg):  {avg_generator:.4f} seconds")
    print(f"Overhead:         {overhead:.2f}x")

    return overhead


# ---------------------------------------------------------------------------
# Individual benchmarks
# ---------------------------------------------------------------------------


def bench_map_take():
    """Benchmark: Map and take."""
    N = 1_000_000
    seq = count().map(_square)

    def lazy():
        return seq.take(N)

    def generator():
        return list(itertools.islice(map(_square, itertools.count()), N))

    return benchmark("Map and Take", lazy, generator)


def bench_filter_take():
    """Benchmark: Filter and take."""
    N = 500_000
    seq = count().filter(_is_even)

    def lazy():
        return seq.take(N)

    def generator():
        return list(
            itertools.islice(filter(_is_even, itertools.count()), N)
        )

    return benchmark("Filter Even Numbers and Take", lazy, generator)


def bench_complex_pipeline():
    """Benchmark: Multi-stage pipeline."""
    N = 300_000
    seq = count().map(_double).filter(_divisible_by_3).map(_increment)

    def lazy():
        return seq.take(N)

    def generator():
        doubled = map(_double, itertools.count())
        return list(
            itertools.islice(map(_increment, filter(_divisible_by_3, doubled)), N)
        )

    return benchmark("Complex Pipeline", lazy, generator)


def bench_deep_chain():
    """Benchmark: Per-pull cost of a long chain of maps."""
    N = 10_000
    DEPTH = 200
    seq = count()
    for _ in range(DEPTH):
        seq = seq.map(_increment)

    def lazy():
        return seq.take(N)

    def generator():
        iterator = itertools.count()
        for _ in range(DEPTH):
            iterator = map(_increment, iterator)
        return list(itertools.islice(iterator, N))

    return benchmark(f"Chain of {DEPTH} Maps", lazy, generator)


def bench_nth():
    """Benchmark: Random access into a filtered sequence."""
    N = 500_000
    seq = count().filter(_is_even)

    def lazy():
        return seq.nth(N)

    def generator():
        return next(itertools.islice(filter(_is_even, itertools.count()), N, None))

    return benchmark("nth on Filtered Sequence", lazy, generator)


def main():
    """Run all benchmarks."""
    print("lazyseq benchmarks")

    results = {
        "map_take": bench_map_take(),
        "filter_take": bench_filter_take(),
        "complex_pipeline": bench_complex_pipeline(),
        "deep_chain": bench_deep_chain(),
        "nth": bench_nth(),
    }

    print(f"\n{'=' * 60}")
    print("Summary")
    print(f"{'=' * 60}")
    for name, overhead in results.items():
        print(f"{name:<20} {overhead:.2f}x")


if __name__ == "__main__":
    main()
