"""
Tests for lazy sequence transformations and realization.
"""

import pytest

from lazyseq import (
    InvalidArgumentError,
    OutOfRangeError,
    count,
    from_iterable,
    from_step,
    from_values,
    wrap,
)


def naturals():
    return from_step(lambda x: x + 1, 0)


class TestRealization:
    """Tests for take, nth, drop and take_continuous."""

    def test_take(self):
        """Test take on an infinite sequence."""
        assert naturals().take(5) == [0, 1, 2, 3, 4]

    def test_take_zero(self):
        """Test that take(0) is empty."""
        assert naturals().take(0) == []

    def test_take_short_finite(self):
        """Test that take returns a short list when the sequence ends early."""
        assert from_iterable([1, 2, 3]).take(10) == [1, 2, 3]

    def test_take_is_pure(self):
        """Test that taking twice gives the same result."""
        seq = naturals().map(lambda x: x * x).filter(lambda x: x % 2 == 0)
        assert seq.take(7) == seq.take(7)

    def test_nth(self):
        """Test nth on an infinite sequence."""
        assert naturals().nth(5) == 5
        assert naturals().nth(0) == 0

    def test_nth_out_of_range(self):
        """Test nth past the end of a finite sequence."""
        with pytest.raises(OutOfRangeError):
            from_iterable([1, 2, 3]).nth(5)

    def test_nth_out_of_range_is_index_error(self):
        """Test that OutOfRangeError can be caught as IndexError."""
        with pytest.raises(IndexError):
            from_iterable([1, 2, 3]).nth(3)

    def test_nth_last_element(self):
        """Test nth on the last element of a finite sequence."""
        assert from_iterable([1, 2, 3]).nth(2) == 3

    def test_first(self):
        """Test first and first on an empty sequence."""
        assert naturals().first() == 0
        with pytest.raises(OutOfRangeError):
            from_values().first()

    def test_drop(self):
        """Test drop then take."""
        assert naturals().drop(3).take(3) == [3, 4, 5]

    def test_drop_leaves_original(self):
        """Test that drop does not affect the original sequence."""
        seq = naturals()
        dropped = seq.drop(10)
        assert dropped.take(2) == [10, 11]
        assert seq.take(2) == [0, 1]

    def test_drop_past_end(self):
        """Test drop past the end of a finite sequence."""
        assert from_values(1, 2).drop(5).take(3) == []

    def test_drop_take_decomposition(self):
        """Test take(n + m) == take(n) + drop(n).take(m)."""
        seq = naturals().filter(lambda x: x % 3 != 0).map(lambda x: x * 10)
        for n in (0, 1, 4, 9):
            for m in (0, 1, 5):
                assert seq.take(n + m) == seq.take(n) + seq.drop(n).take(m)

    def test_take_continuous(self):
        """Test the values and continuation of take_continuous."""
        values, rest = naturals().take_continuous(3)
        assert values == [0, 1, 2]
        assert rest.take(3) == [3, 4, 5]
        assert rest.take(3) == [3, 4, 5]

    def test_take_continuous_law(self):
        """Test values == take(n) and continuation == drop(n)."""
        seq = from_values(*"abcdefgh")
        for n in (0, 2, 5, 8, 12):
            values, rest = seq.take_continuous(n)
            assert values == seq.take(n)
            for m in (0, 1, 3, 10):
                assert rest.take(m) == seq.drop(n).take(m)

    def test_take_continuous_chained(self):
        """Test splitting a sequence repeatedly with take_continuous."""
        seq = naturals()
        pages = []
        for _ in range(3):
            page, seq = seq.take_continuous(4)
            pages.append(page)
        assert pages == [[0, 1, 2, 3], [4, 5, 6, 7], [8, 9, 10, 11]]


class TestInvalidArguments:
    """Tests for argument validation."""

    @pytest.mark.parametrize("bad", [-1, 1.5, "3", None, True])
    def test_take_rejects(self, bad):
        """Test that take rejects non-integers and negatives."""
        with pytest.raises(InvalidArgumentError):
            naturals().take(bad)

    @pytest.mark.parametrize("bad", [-1, 2.0, False])
    def test_nth_rejects(self, bad):
        """Test that nth rejects non-integers and negatives."""
        with pytest.raises(InvalidArgumentError):
            naturals().nth(bad)

    def test_drop_rejects(self):
        """Test that drop rejects a negative count."""
        with pytest.raises(InvalidArgumentError):
            naturals().drop(-2)

    def test_take_continuous_rejects(self):
        """Test that take_continuous rejects a negative count."""
        with pytest.raises(InvalidArgumentError):
            naturals().take_continuous(-1)

    def test_invalid_argument_is_value_error(self):
        """Test that InvalidArgumentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            naturals().take(-1)

    def test_raised_before_pulling(self):
        """Test that validation happens before the producer is invoked."""
        calls = []

        def factory():
            calls.append(1)
            return iter([1, 2, 3])

        seq = wrap(factory).map(lambda x: x + 1)
        with pytest.raises(InvalidArgumentError):
            seq.take(-1)
        with pytest.raises(InvalidArgumentError):
            seq.nth(-1)
        assert calls == []


class TestMap:
    """Tests for map and map_indexed."""

    def test_map(self):
        """Test map applies the function element-wise."""
        seq = naturals()
        assert seq.map(lambda x: x * 2).take(5) == [
            x * 2 for x in seq.take(5)
        ]

    def test_multi_map(self):
        """Test multiple map operations."""
        result = (
            naturals()
            .map(lambda x: x + 1)
            .map(lambda x: x * 2)
            .map(lambda x: x - 1)
            .take(10)
        )
        assert result == [(x + 1) * 2 - 1 for x in range(10)]

    def test_map_indexed(self):
        """Test that map_indexed passes the element position."""
        result = from_values("a", "b", "c").map_indexed(
            lambda value, index: f"{index}{value}"
        )
        assert result.take(5) == ["0a", "1b", "2c"]

    def test_map_indexed_restarts_per_realization(self):
        """Test that the index starts at 0 for every realization."""
        seq = count(100).map_indexed(lambda value, index: index)
        assert seq.take(3) == [0, 1, 2]
        assert seq.take(3) == [0, 1, 2]

    def test_enumerate(self):
        """Test enumerate with a start value."""
        assert from_values("a", "b").enumerate(1).take(5) == [
            (1, "a"),
            (2, "b"),
        ]


class TestFilter:
    """Tests for filter and its variants."""

    def test_filter_even(self):
        """Test filter on an infinite sequence."""
        assert naturals().filter(lambda x: x % 2 == 0).take(5) == [
            0,
            2,
            4,
            6,
            8,
        ]

    def test_filter_preserves_order(self):
        """Test that every accepted element satisfies the predicate, in order."""
        source = from_values(5, 3, 8, 1, 9, 2, 7)
        result = source.filter(lambda x: x > 4).take(10)
        assert result == [5, 8, 9, 7]

    def test_filter_all_out_finite(self):
        """Test filter that removes all elements of a finite sequence."""
        assert from_iterable(range(10)).filter(lambda x: x > 100).take(5) == []

    def test_filter_indexed(self):
        """Test filter_indexed on positions."""
        seq = from_iterable("abcdef").filter_indexed(
            lambda value, index: index % 2 == 0
        )
        assert seq.take(10) == ["a", "c", "e"]

    def test_filter_indexed_counts_examined(self):
        """Test that the index counts examined, not accepted, elements."""
        indices = []

        def predicate(value, index):
            indices.append(index)
            return value % 3 == 0

        assert naturals().filter_indexed(predicate).take(3) == [0, 3, 6]
        assert indices == list(range(7))

    def test_filter_indexed_after_filter(self):
        """Test that the index is the position in the parent sequence."""
        seq = (
            naturals()
            .filter(lambda x: x % 3 == 0)
            .filter_indexed(lambda value, index: index % 2 == 0)
        )
        assert seq.take(3) == [0, 6, 12]

    def test_filter_dependent_primes(self):
        """Test a sieve built from filter_dependent."""
        primes = count(2).filter_dependent(
            lambda x, found: all(x % p for p in found)
        )
        assert primes.take(8) == [2, 3, 5, 7, 11, 13, 17, 19]
        assert primes.take(8) == [2, 3, 5, 7, 11, 13, 17, 19]

    def test_filter_dependent_sees_only_accepted(self):
        """Test that the history contains accepted elements only."""
        seen = []

        def predicate(value, accepted):
            seen.append(accepted)
            return value % 3 == 0

        assert naturals().filter_dependent(predicate).take(3) == [0, 3, 6]
        assert seen[0] == ()
        assert seen[1] == (0,)
        assert seen[-1] == (0, 3)
        assert all(set(accepted) <= {0, 3} for accepted in seen)

    def test_filter_dependent_history_shared_between_rejections(self):
        """Test that rejections reuse the same history instead of copying it."""
        seen = []

        def predicate(value, accepted):
            seen.append(accepted)
            return value % 5 == 0

        assert naturals().filter_dependent(predicate).take(2) == [0, 5]
        # values 1..5 all see the history (0,)
        assert all(accepted is seen[1] for accepted in seen[1:6])
        assert seen[1] == (0,)

    def test_filter_dependent_distinct(self):
        """Test dropping duplicates with filter_dependent."""
        seq = from_values(1, 1, 2, 1, 3, 2, 4).filter_dependent(
            lambda x, accepted: x not in accepted
        )
        assert seq.take(10) == [1, 2, 3, 4]

    def test_take_while(self):
        """Test that take_while bounds an infinite sequence."""
        seq = naturals().take_while(lambda x: x < 4)
        assert seq.take(10) == [0, 1, 2, 3]
        assert list(seq) == [0, 1, 2, 3]


class TestFlatMap:
    """Tests for flat_map."""

    def test_flat_map(self):
        """Test that each collection is drained in order."""
        seq = count(1).flat_map(lambda x: [x] * x)
        assert seq.take(6) == [1, 2, 2, 3, 3, 3]

    def test_flat_map_skips_empty(self):
        """Test that empty collections are skipped."""
        seq = naturals().flat_map(lambda x: [x] if x % 2 else [])
        assert seq.take(3) == [1, 3, 5]

    def test_flat_map_generator(self):
        """Test flat_map with a generator expression."""
        seq = from_values("ab", "cd").flat_map(lambda s: (c.upper() for c in s))
        assert seq.take(10) == ["A", "B", "C", "D"]

    def test_flat_map_then_drop(self):
        """Test drop across collection boundaries."""
        seq = count(1).flat_map(lambda x: [x, -x])
        assert seq.drop(3).take(3) == [-2, 3, -3]


class TestZipIntersperse:
    """Tests for combining two sequences."""

    def test_zip_infinite(self):
        """Test zip of two infinite sequences."""
        assert naturals().zip(count(10, 10)).take(3) == [
            (0, 10),
            (1, 20),
            (2, 30),
        ]

    def test_zip_shorter(self):
        """Test that zip stops at the shorter sequence."""
        result = from_values(1, 2, 3).zip(naturals()).take(10)
        assert result == [(1, 0), (2, 1), (3, 2)]

    def test_zip_shorter_right(self):
        """Test that zip stops when the right side ends."""
        result = naturals().zip(from_values("a", "b")).take(10)
        assert result == [(0, "a"), (1, "b")]

    def test_zip_with_self(self):
        """Test that zipping a sequence with itself uses two cursors."""
        seq = naturals()
        assert seq.zip(seq).take(3) == [(0, 0), (1, 1), (2, 2)]

    def test_intersperse(self):
        """Test intersperse of two infinite sequences."""
        result = count(1).intersperse(count(10, 10)).take(6)
        assert result == [1, 10, 2, 20, 3, 30]

    def test_intersperse_finite(self):
        """Test that intersperse ends when the side whose turn it is ends."""
        result = from_values(1, 2).intersperse(count(10, 10)).take(10)
        assert result == [1, 10, 2, 20]
        result = count(1).intersperse(from_values("a")).take(10)
        assert result == [1, "a", 2]


class TestComplexPipelines:
    """Tests for long and mixed pipelines."""

    def test_map_filter_map(self):
        """Test alternating map and filter."""
        result = (
            naturals()
            .map(lambda x: x * 2)
            .filter(lambda x: x > 20)
            .map(lambda x: x + 1)
            .take(5)
        )
        assert result == [23, 25, 27, 29, 31]

    def test_deep_chain(self):
        """Test that very long chains realize without deep recursion."""
        seq = naturals()
        for _ in range(5000):
            seq = seq.map(lambda x: x + 1)
        assert seq.take(3) == [5000, 5001, 5002]

    def test_shared_ancestor(self):
        """Test that children of one sequence are independent."""
        base = naturals().filter(lambda x: x % 2 == 1)
        squares = base.map(lambda x: x * x)
        pairs = base.zip(squares)
        assert base.take(3) == [1, 3, 5]
        assert squares.take(3) == [1, 9, 25]
        assert pairs.take(2) == [(1, 1), (3, 9)]
        assert base.take(3) == [1, 3, 5]


class TestPythonProtocols:
    """Tests for iteration, indexing and to_generator."""

    def test_iter_is_fresh(self):
        """Test that each iter() starts from the beginning."""
        seq = from_values(1, 2, 3)
        assert list(seq) == [1, 2, 3]
        assert list(seq) == [1, 2, 3]

    def test_iter_infinite_with_break(self):
        """Test stopping an infinite iteration early."""
        seen = []
        for value in naturals():
            if value > 3:
                break
            seen.append(value)
        assert seen == [0, 1, 2, 3]

    def test_getitem_index(self):
        """Test integer indexing."""
        assert naturals()[5] == 5
        with pytest.raises(IndexError):
            from_values(1)[1]

    def test_getitem_slice(self):
        """Test slicing."""
        assert naturals()[:3] == [0, 1, 2]
        assert naturals()[2:8:2] == [2, 4, 6]
        assert naturals()[5:2] == []

    @pytest.mark.parametrize(
        "index", [slice(3, None), slice(-1, 3), slice(0, 3, 0), -1]
    )
    def test_getitem_rejects(self, index):
        """Test that unbounded and negative indices are rejected."""
        with pytest.raises(InvalidArgumentError):
            naturals()[index]

    def test_to_generator(self):
        """Test that generators from to_generator are independent."""
        make = naturals().map(lambda x: x * 3).to_generator()
        first = make()
        second = make()
        assert [next(first), next(first), next(first)] == [0, 3, 6]
        assert next(second) == 0
        assert next(first) == 9

    def test_to_generator_finite(self):
        """Test that a finite generator stops."""
        make = from_values(1, 2).to_generator()
        assert list(make()) == [1, 2]
        assert list(make()) == [1, 2]
