import math

import numpy as np
import pytest

from id3py import sampling
from id3py.sampling import ClosureType, Interval


def test_range_indices():
    assert sampling.range_indices(2, 6) == [2, 3, 4, 5]
    assert sampling.range_indices(3, 3) == []


def test_shuffle_indices_is_a_permutation():
    perm = sampling.shuffle_indices(20, np.random.default_rng(5))
    assert sorted(perm) == list(range(20))
    assert sampling.shuffle_indices(0) == []


def test_shuffle_is_reproducible_with_seeded_generator():
    a = sampling.shuffle_indices(10, np.random.default_rng(11))
    b = sampling.shuffle_indices(10, np.random.default_rng(11))
    assert a == b


@pytest.mark.parametrize("ratio,n", [(0.0, 7), (0.3, 7), (0.5, 10), (0.66, 14), (1.0, 5), (0.5, 0)])
def test_random_split_partitions_all_indices(ratio, n):
    split = sampling.random_split(ratio, n, np.random.default_rng(0))
    assert len(split.first) == min(math.ceil(ratio * n), n)
    assert sorted(split.first + split.second) == list(range(n))


def test_random_split_rejects_bad_ratio():
    with pytest.raises(ValueError):
        sampling.random_split(1.5, 4)


def test_interval_closures():
    assert Interval(0.0, 1.0).contains(0.0)
    assert not Interval(0.0, 1.0).contains(1.0)
    assert Interval(0.0, 1.0, ClosureType.CLOSED).contains(1.0)
    assert not Interval(0.0, 1.0, ClosureType.OPEN).contains(0.0)
    assert Interval(0.0, 1.0, ClosureType.L_OPEN).contains(1.0)
    assert not Interval(0.0, 1.0, ClosureType.L_OPEN).contains(0.0)
    assert str(Interval(0.0, 0.5)) == "[0.0, 0.5)"


def test_build_distribution_accumulates_margins():
    dist = sampling.build_distribution([0.25, 0.0, 0.75])
    assert [(i.left, i.right) for i in dist] == [(0.0, 0.25), (0.25, 0.25), (0.25, 1.0)]


def test_weighted_bootstrap_concentrated_on_one_index():
    dist = sampling.build_distribution([0.0, 0.0, 1.0, 0.0, 0.0])
    indices = sampling.weighted_bootstrap(dist, np.random.default_rng(9))
    assert indices == [2] * 5


def test_weighted_bootstrap_draws_proportionally():
    dist = sampling.build_distribution([0.8, 0.2] + [0.0] * 198)
    indices = sampling.weighted_bootstrap(dist, np.random.default_rng(2))
    counts = np.bincount(indices, minlength=2)
    assert counts[0] + counts[1] == 200
    assert 130 < counts[0] < 190


def test_weighted_bootstrap_assigns_shortfall_to_last_positive_interval():
    class Draws:
        def random(self, n):
            return np.array([0.95] * n)

    # weights sum to 0.9: a draw of 0.95 lies past the last margin
    dist = sampling.build_distribution([0.5, 0.4, 0.0])
    assert sampling.weighted_bootstrap(dist, Draws()) == [1, 1, 1]


def test_set_default_rng_makes_default_path_reproducible():
    sampling.set_default_rng(123)
    a = sampling.shuffle_indices(8)
    sampling.set_default_rng(123)
    b = sampling.shuffle_indices(8)
    assert a == b
    sampling.set_default_rng(None)
