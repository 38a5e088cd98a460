# -*- coding: utf-8 -*-
"""
id3py.sampling
==============

Index generators used by the view layer: ranges, shuffles, random
training/test splits and weighted bootstrap draws.

All randomness comes from a :class:`numpy.random.Generator`.  Every function
accepts an optional ``rng``; when it is omitted a process-wide, unseeded
generator is used.  Tests (and anyone who needs reproducible runs) either pass
their own generator or reseed the shared one via :func:`set_default_rng`.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple, Sequence

import numpy as np

_default_rng: np.random.Generator = np.random.default_rng()


def default_rng() -> np.random.Generator:
    """Return the process-wide generator."""
    return _default_rng


def set_default_rng(seed: int | np.random.Generator | None = None) -> np.random.Generator:
    """Replace the process-wide generator.

    Parameters
    ----------
    seed : int, Generator or None
        A seed for :func:`numpy.random.default_rng`, an existing generator, or
        ``None`` for fresh OS entropy.
    """
    global _default_rng
    if isinstance(seed, np.random.Generator):
        _default_rng = seed
    else:
        _default_rng = np.random.default_rng(seed)
    return _default_rng


def _resolve(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else _default_rng


# -----------------------------------------------------------------------------
# Intervals
# -----------------------------------------------------------------------------
class ClosureType(Enum):
    OPEN = "open"
    CLOSED = "closed"
    L_OPEN = "left_open"
    R_OPEN = "right_open"


@dataclass(frozen=True)
class Interval:
    left: float
    right: float
    closure: ClosureType = ClosureType.R_OPEN

    def contains(self, value: float) -> bool:
        if self.closure is ClosureType.OPEN:
            return self.left < value < self.right
        if self.closure is ClosureType.CLOSED:
            return self.left <= value <= self.right
        if self.closure is ClosureType.L_OPEN:
            return self.left < value <= self.right
        return self.left <= value < self.right

    @property
    def width(self) -> float:
        return self.right - self.left

    def __str__(self):
        lb = "[" if self.closure in (ClosureType.CLOSED, ClosureType.R_OPEN) else "("
        rb = "]" if self.closure in (ClosureType.CLOSED, ClosureType.L_OPEN) else ")"
        return f"{lb}{self.left}, {self.right}{rb}"


# -----------------------------------------------------------------------------
# Index generation
# -----------------------------------------------------------------------------
class Split(NamedTuple):
    """Two disjoint index lists covering ``[0, n)``."""

    first: list[int]
    second: list[int]


def range_indices(from_index: int, to_index: int) -> list[int]:
    """Return ``[from_index, from_index + 1, ..., to_index - 1]``."""
    return list(range(int(from_index), int(to_index)))


def shuffle_indices(n: int, rng: np.random.Generator | None = None) -> list[int]:
    """Return a uniformly random permutation of ``[0, n)``."""
    return [int(i) for i in _resolve(rng).permutation(int(n))]


def random_split(ratio: float, n: int, rng: np.random.Generator | None = None) -> Split:
    """Randomly split ``[0, n)`` into two disjoint index lists.

    The first list holds ``min(ceil(ratio * n), n)`` indices, the second the
    rest.  Together they contain every index exactly once.

    Parameters
    ----------
    ratio : float
        Fraction of indices that go to the first list, in ``[0, 1]``.
    n : int
        Number of indices.
    rng : Generator, optional
        Source of randomness.
    """
    if not 0.0 <= ratio <= 1.0:
        raise ValueError("ratio must be between 0 and 1")
    k = min(int(math.ceil(ratio * n)), n)
    indices = shuffle_indices(n, rng)
    return Split(indices[:k], indices[k:])


def build_distribution(weights: Iterable[float]) -> list[Interval]:
    """Lay ``weights`` end to end as right-open intervals starting at 0.

    With normalised weights the intervals partition ``[0, 1)`` in input order.
    """
    distribution = []
    margin = 0.0
    for w in weights:
        distribution.append(Interval(margin, margin + w, ClosureType.R_OPEN))
        margin += w
    return distribution


def weighted_bootstrap(distribution: Sequence[Interval],
                       rng: np.random.Generator | None = None) -> list[int]:
    """Draw ``len(distribution)`` indices with replacement.

    Each draw is a uniform number in ``[0, 1)``; the index returned for it is
    the position of the interval containing the number, found by a linear
    scan.  Indices are therefore drawn proportionally to interval width.

    A draw that falls past the last margin (the weights summed to slightly
    less than 1) goes to the last interval of positive width.
    """
    n = len(distribution)
    if n == 0:
        return []
    fallback = next((j for j in range(n - 1, -1, -1) if distribution[j].width > 0), n - 1)
    draws = _resolve(rng).random(n)
    indices = []
    for draw in draws:
        chosen = fallback
        for j, interval in enumerate(distribution):
            if interval.contains(float(draw)):
                chosen = j
                break
        indices.append(chosen)
    return indices
