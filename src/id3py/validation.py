"""
Model evaluation over dataset views: k-fold and stratified k-fold
cross-validation.

Folds are views, so no instance is ever copied.  Stratified folds are put
back together from per-class pieces with :class:`~id3py.views.ListView`.
"""
from __future__ import annotations

import logging

import numpy as np

from . import sampling
from .domain import EnumAttribute
from .exceptions import EmptyDatasetError
from .measures import ClassificationResult, mean_dev
from .tree import DecisionModel
from .views import DatasetSplit, DatasetView, IndexedView, ListView, PredicateView, RangeView, ShuffleView

logger = logging.getLogger(__name__)


def stratification(view: DatasetView, class_attribute: EnumAttribute) -> list[PredicateView]:
    """Group the instances of ``view`` by class value, in domain order."""
    return [PredicateView.select_instances(view, class_attribute, v) for v in class_attribute]


def shuffle(view: DatasetView, rng: np.random.Generator | None = None) -> ShuffleView:
    return ShuffleView(view, rng)


def _fold_bounds(n: int, fold: int, num_folds: int) -> tuple[int, int]:
    if not 0 <= fold < num_folds:
        raise ValueError(f"fold must be in [0, {num_folds}), got {fold}")
    return fold * n // num_folds, (fold + 1) * n // num_folds


def train_cv(view: DatasetView, fold: int, num_folds: int) -> DatasetView:
    """Training part of fold ``fold``: everything outside :func:`test_cv`.

    With ``num_folds == 0`` the whole view is returned.
    """
    if num_folds == 0:
        return view
    n = view.num_instances()
    lo, hi = _fold_bounds(n, fold, num_folds)
    return IndexedView(view, sampling.range_indices(0, lo) + sampling.range_indices(hi, n))


def test_cv(view: DatasetView, fold: int, num_folds: int) -> DatasetView:
    """Contiguous test part of fold ``fold``.

    With ``num_folds == 0`` the whole view is returned.
    """
    if num_folds == 0:
        return view
    lo, hi = _fold_bounds(view.num_instances(), fold, num_folds)
    return RangeView(view, lo, hi)


def stratified_folds(view: DatasetView, class_attribute: EnumAttribute, num_folds: int,
                     rng: np.random.Generator | None = None) -> list[DatasetSplit]:
    """
    Build ``num_folds`` training/test splits that preserve class proportions.

    Every class stratum is shuffled and cut into ``num_folds`` contiguous
    pieces; fold ``i`` tests on piece ``i`` of every stratum and trains on the
    rest.  Every instance lands in exactly one test view.
    """
    if num_folds < 2:
        raise ValueError("stratified cross-validation needs at least 2 folds")
    strata = [shuffle(s, rng) for s in stratification(view, class_attribute) if s.has_instances()]
    folds = []
    for i in range(num_folds):
        training = ListView([train_cv(s, i, num_folds) for s in strata], name=view.name)
        testing = ListView([test_cv(s, i, num_folds) for s in strata], name=view.name)
        folds.append(DatasetSplit(training, testing))
    return folds


def _evaluate(splits, class_attribute: EnumAttribute, model: DecisionModel) -> ClassificationResult:
    accuracies = []
    for i, (training, testing) in enumerate(splits):
        if not training.has_instances() or not testing.has_instances():
            logger.warning("skipping fold %d: empty training or test view", i)
            continue
        model.train_model(training, class_attribute)
        accuracies.append(model.test_model(testing, class_attribute))
        logger.debug("fold %d: accuracy %.4f", i, accuracies[-1])
    if not accuracies:
        raise EmptyDatasetError("every fold has an empty training or test view")
    return mean_dev(accuracies)


def cross_validation(view: DatasetView, class_attribute: EnumAttribute, model: DecisionModel,
                     num_folds: int) -> ClassificationResult:
    """Plain k-fold cross-validation over contiguous folds of ``view``."""
    splits = [DatasetSplit(train_cv(view, i, num_folds), test_cv(view, i, num_folds))
              for i in range(num_folds)]
    return _evaluate(splits, class_attribute, model)


def stratified_cross_validation(view: DatasetView, class_attribute: EnumAttribute,
                                model: DecisionModel, num_folds: int,
                                rng: np.random.Generator | None = None) -> ClassificationResult:
    """Mean and deviation of the test accuracy over stratified folds."""
    return _evaluate(stratified_folds(view, class_attribute, num_folds, rng), class_attribute, model)
