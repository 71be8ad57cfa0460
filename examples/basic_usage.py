"""
Basic usage examples for lazyseq.

This demonstrates building, transforming and realizing infinite sequences.
"""

from lazyseq import (
    NonTerminationError,
    count,
    from_iterable,
    from_step,
    set_max_scan,
    wrap,
)


def example_take_and_filter():
    """Example: Filtering an infinite sequence."""
    print("=== Take and Filter Example ===")

    naturals = from_step(lambda x: x + 1, 0)
    evens = naturals.filter(lambda x: x % 2 == 0)
    print(f"First five even numbers: {evens.take(5)}")

    # The same value can be realized again with the same result
    print(f"Again: {evens.take(5)}")
    print(f"Tenth natural number: {naturals.nth(9)}")


def example_primes():
    """Example: A prime sieve from a history-dependent filter."""
    print("\n=== Prime Example ===")

    primes = count(2).filter_dependent(
        lambda x, found: all(x % p for p in found)
    )
    print(f"First ten primes: {primes.take(10)}")


def example_pagination():
    """Example: Splitting a sequence into pages with take_continuous."""
    print("\n=== Pagination Example ===")

    squares = count(1).map(lambda x: x * x)
    rest = squares
    for page_number in range(1, 4):
        page, rest = rest.take_continuous(4)
        print(f"Page {page_number}: {page}")


def example_combining():
    """Example: zip, intersperse and flat_map."""
    print("\n=== Combining Example ===")

    letters = from_iterable("abc")
    print(f"Zipped: {letters.zip(count(1)).take(10)}")
    print(f"Interspersed: {count(1).intersperse(count(10, 10)).take(6)}")
    print(f"Flattened: {count(1).flat_map(lambda x: [x] * x).take(6)}")


def example_generators():
    """Example: Wrapping a generator function and iterating."""
    print("\n=== Generator Example ===")

    def fibonacci():
        a, b = 0, 1
        while True:
            yield a
            a, b = b, a + b

    fib = wrap(fibonacci)
    print(f"Fibonacci: {fib.take(10)}")
    print(f"Fibonacci under 100: {list(fib.take_while(lambda x: x < 100))}")

    make = fib.to_generator()
    iterator = make()
    print(f"Stepping manually: {next(iterator)}, {next(iterator)}")


def example_scan_limit():
    """Example: Guarding a filter that never matches again."""
    print("\n=== Scan Limit Example ===")

    set_max_scan(10_000)
    small = count().filter(lambda x: x < 3)
    try:
        small.take(4)
    except NonTerminationError as exc:
        print(f"Stopped: {exc}")
    finally:
        set_max_scan(None)

    # You can also set via environment variable:
    # export LAZYSEQ_MAX_SCAN=10000


def main():
    """Run all examples."""
    print("lazyseq - Lazy Infinite Sequences\n")

    example_take_and_filter()
    example_primes()
    example_pagination()
    example_combining()
    example_generators()
    example_scan_limit()

    print("\n=== All Examples Complete ===")


if __name__ == "__main__":
    main()
