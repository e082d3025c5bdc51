"""
Unit tests for the randomness sources.
"""

import pytest

from gmtools.generators.random_source import (
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
)


class TestSystemRandomSource:

    def test_draws_within_bound(self):
        rng = SystemRandomSource()
        assert all(0 <= rng.randbelow(4) < 4 for _ in range(200))

    def test_same_seed_same_draws(self):
        first = SystemRandomSource(seed=99)
        second = SystemRandomSource(seed=99)
        assert [first.randbelow(100) for _ in range(20)] == [second.randbelow(100) for _ in range(20)]

    @pytest.mark.parametrize("bound", [0, -3])
    def test_non_positive_bound_rejected(self, bound):
        with pytest.raises(ValueError, match="positive bound"):
            SystemRandomSource().randbelow(bound)

    def test_satisfies_protocol(self):
        assert isinstance(SystemRandomSource(), RandomSource)


class TestSequenceRandomSource:

    def test_replays_in_order_and_records_bounds(self):
        rng = SequenceRandomSource([2, 0, 1])
        assert [rng.randbelow(3), rng.randbelow(5), rng.randbelow(2)] == [2, 0, 1]
        assert rng.calls == [3, 5, 2]

    def test_exhausted_sequence_raises(self):
        rng = SequenceRandomSource([0])
        rng.randbelow(2)
        with pytest.raises(IndexError, match="exhausted after 1 draws"):
            rng.randbelow(2)

    def test_repeat_cycles(self):
        rng = SequenceRandomSource([1, 0], repeat=True)
        assert [rng.randbelow(2) for _ in range(5)] == [1, 0, 1, 0, 1]

    def test_repeat_requires_draws(self):
        with pytest.raises(ValueError, match="at least one draw"):
            SequenceRandomSource([], repeat=True)

    def test_out_of_range_draw_rejected(self):
        rng = SequenceRandomSource([3])
        with pytest.raises(ValueError, match="outside \\[0, 3\\)"):
            rng.randbelow(3)

    def test_satisfies_protocol(self):
        assert isinstance(SequenceRandomSource([0]), RandomSource)
