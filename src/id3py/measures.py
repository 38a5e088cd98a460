# -*- coding: utf-8 -*-
"""
id3py.measures
==============

Statistics over dataset views: value ratios, Shannon entropy, information
gain, the most common value of an attribute, and the mean / standard
deviation of repeated evaluation results.

All functions iterate domains in declaration order, so ties are resolved
deterministically in favour of the first value declared.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .domain import EnumAttribute, Value
from .views import DatasetView, IndexedView, PredicateView


@dataclass(frozen=True)
class ClassificationResult:
    """Mean and population standard deviation of repeated accuracies."""

    mean: float
    deviation: float

    def __str__(self):
        return f"mean={self.mean:.4f}, deviation={self.deviation:.4f}"


def ratio(view: DatasetView, attribute: EnumAttribute, value) -> float:
    """Fraction of instances in ``view`` with ``value`` at ``attribute``.

    Returns 0 for an empty view.
    """
    n = view.num_instances()
    if n == 0:
        return 0.0
    return PredicateView.select_instances(view, attribute, value).num_instances() / n


def most_common_value(view: DatasetView, attribute: EnumAttribute) -> Value:
    """Return the domain value of ``attribute`` with the largest ratio.

    A strict ``>`` forward scan over the domain, so the first maximal value
    wins a tie (for an empty view that is the first domain value).
    """
    best, best_ratio = None, -np.inf
    for value in attribute:
        r = ratio(view, attribute, value)
        if r > best_ratio:
            best, best_ratio = value, r
    return best


def _entropy(p: np.ndarray) -> float:
    p = p[p > 0]
    return float(-np.sum(p * np.log2(p)))


def entropy(view: DatasetView, class_attribute: EnumAttribute) -> float:
    """Shannon entropy (base 2) of the class distribution in ``view``.

    Values that do not occur are skipped, so ``log2(0)`` is never evaluated.
    A view holding a single class (or no instance at all) has entropy 0.
    """
    p = np.array([ratio(view, class_attribute, v) for v in class_attribute], dtype=float)
    return _entropy(p)


def information_gain(view: DatasetView, class_attribute: EnumAttribute,
                     split_attribute: EnumAttribute) -> float:
    """Entropy reduction obtained by partitioning ``view`` on ``split_attribute``.

    ``entropy(S) - sum_v |S_v| / |S| * entropy(S_v)`` over the domain of the
    split attribute, where ``S_v`` holds the instances with value ``v``.
    """
    gain = entropy(view, class_attribute)
    n = view.num_instances()
    if n == 0:
        return gain
    for value in split_attribute:
        subset = PredicateView.select_instances(view, split_attribute, value)
        if subset.has_instances():
            gain -= subset.num_instances() / n * entropy(subset, class_attribute)
    return gain


def entropy_on_subset(view: DatasetView, indices: Sequence[int],
                      class_attribute: EnumAttribute) -> float:
    return entropy(IndexedView(view, indices), class_attribute)


def information_gain_on_subset(view: DatasetView, indices: Sequence[int],
                               class_attribute: EnumAttribute,
                               split_attribute: EnumAttribute) -> float:
    return information_gain(IndexedView(view, indices), class_attribute, split_attribute)


def mean_dev(values: Iterable[float]) -> ClassificationResult:
    """Arithmetic mean and population standard deviation (divides by ``n``)."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        raise ValueError("mean_dev requires at least one value")
    return ClassificationResult(float(arr.mean()), float(arr.std(ddof=0)))
