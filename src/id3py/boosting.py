# -*- coding: utf-8 -*-
"""
id3py.boosting
==============

Boosted ensembles of ID3 trees combined by a weighted-majority vote.

Each round draws a weighted bootstrap sample from the training view, trains a
tree on it and measures the tree's error on that same sample.  The weights of
the instances the tree classifies correctly are then multiplied by
``e / (1 - e)`` and renormalised, which shifts probability mass toward the
instances it got wrong (discrete AdaBoost.M1 up to normalisation).

The error is measured on the training sample itself rather than on held-out
data; a perfect fit (``e == 0``) ends the loop with that tree kept, and a tree
no better than chance (``e >= 0.5``) ends it with that tree discarded.  Both
are regular outcomes reported through :class:`TerminationReason`, not errors.

Training mutates the weights of the instances behind the given view.  Any
other view over the same dataset sees the new weights.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Iterator, NamedTuple, Sequence

import numpy as np

from .domain import EnumAttribute, Instance, Value, as_value
from .tree import DecisionModel, DecisionTreeModel
from .views import DatasetView

logger = logging.getLogger(__name__)


class TerminationReason(Enum):
    COMPLETED = "completed"
    PERFECT_FIT = "perfect_fit"
    WEAK_LEARNER = "weak_learner"


class EnsembleMember(NamedTuple):
    model: DecisionTreeModel
    error: float


class BoostingResult(NamedTuple):
    members: list[EnsembleMember]
    reason: TerminationReason


def generate_ensemble(view: DatasetView, num_iterations: int, class_attribute: EnumAttribute,
                      max_depth: int | None = None,
                      rng: np.random.Generator | None = None) -> BoostingResult:
    """
    Train up to ``num_iterations`` trees by weighted bootstrap resampling.

    Parameters
    ----------
    view : DatasetView
        Training instances.  Their weights are reset to ``1/n`` and then
        updated in place every round.
    num_iterations : int
        Maximum number of rounds.
    class_attribute : EnumAttribute
        The target attribute.
    max_depth : int or None
        Depth limit of every member tree.
    rng : Generator, optional
        Source of randomness for the bootstrap draws.

    Returns
    -------
    BoostingResult
        The accepted ``(model, error)`` pairs and why the loop stopped.
    """
    members: list[EnsembleMember] = []
    view.assign_equal_weights()
    reason = TerminationReason.COMPLETED

    for round_ in range(int(num_iterations)):
        sampled = view.weighted_bootstrap_sampling(rng)
        model = DecisionTreeModel(max_depth)
        model.train_model(sampled, class_attribute)
        model.test_model(sampled, class_attribute)
        e = model.error
        logger.info("boosting round %d: training error %.4f", round_ + 1, e)

        if e >= 0.5:
            reason = TerminationReason.WEAK_LEARNER
            break
        members.append(EnsembleMember(model, e))
        if e == 0.0:
            reason = TerminationReason.PERFECT_FIT
            break

        factor = e / (1.0 - e)
        for inst in view.instances():
            if model.test(inst, class_attribute):
                inst.multiply_weight(factor)
        view.normalize_weights()

    logger.info("boosting stopped after %d member(s): %s", len(members), reason.value)
    return BoostingResult(members, reason)


# -----------------------------------------------------------------------------
# Voting
# -----------------------------------------------------------------------------
class WeightedValues:
    """Running vote weights for every value of an attribute's domain.

    Values are kept in domain order; :meth:`max_weighted_value` returns the
    first value with the maximum weight.
    """

    def __init__(self, attribute: EnumAttribute):
        self._weights: dict[Value, Value] = {}
        for value in attribute:
            tally = value.copy()
            tally.weight = 0.0
            self._weights[value] = tally

    def __contains__(self, value) -> bool:
        return as_value(value) in self._weights

    def get(self, value) -> Value | None:
        return self._weights.get(as_value(value))

    def update_weight(self, value, weight: float) -> bool:
        tally = self.get(value)
        if tally is None:
            return False
        tally.weight = weight
        return True

    def apply_to_weight(self, value, weight: float) -> bool:
        tally = self.get(value)
        if tally is None:
            return False
        tally.weight += weight
        return True

    def is_empty(self) -> bool:
        return not self._weights

    def max_weighted_value(self) -> Value | None:
        best, best_weight = None, -math.inf
        for tally in self._weights.values():
            if tally.weight > best_weight:
                best, best_weight = tally, tally.weight
        return None if best is None else Value(best.value)


def vote_weight(error: float) -> float:
    """``-ln(e / (1 - e))``: larger for more accurate members, infinite at 0."""
    if error <= 0.0:
        return math.inf
    return -math.log(error / (1.0 - error))


def classify_ensemble(members: Sequence[EnsembleMember], instance: Instance,
                      class_attribute: EnumAttribute) -> Value:
    """
    Weighted-majority vote of ``members`` for ``instance``.

    An empty ensemble predicts the first domain value of the class attribute.
    Errors raised by a member (e.g. :class:`~id3py.exceptions.UnseenValueError`)
    propagate.
    """
    if not members:
        return class_attribute.value(0)
    votes = WeightedValues(class_attribute)
    for model, error in members:
        votes.apply_to_weight(model.classify(instance, class_attribute), vote_weight(error))
    return votes.max_weighted_value()


class BoostingForestModel(DecisionModel):
    """
    A boosted ensemble of :class:`~id3py.tree.DecisionTreeModel` members.

    Parameters
    ----------
    num_iterations : int
        Maximum number of boosting rounds.
    max_depth : int or None, default=None
        Depth limit of every member tree.
    rng : Generator, optional
        Source of randomness for bootstrap sampling.

    Attributes
    ----------
    termination_reason : TerminationReason or None
        Why the last :meth:`train_model` call stopped adding members.
    """

    def __init__(self, num_iterations: int, max_depth: int | None = None,
                 rng: np.random.Generator | None = None):
        super().__init__()
        if int(num_iterations) < 1:
            raise ValueError("num_iterations must be >= 1")
        if max_depth is not None and int(max_depth) < 1:
            raise ValueError("max_depth must be >= 1 or None")
        self.num_iterations = int(num_iterations)
        self.max_depth = max_depth
        self.rng = rng
        self.members: list[EnsembleMember] = []
        self.termination_reason: TerminationReason | None = None

    def add(self, model: DecisionTreeModel, error: float) -> None:
        self.members.append(EnsembleMember(model, float(error)))

    def num_models(self) -> int:
        return len(self.members)

    def has_models(self) -> bool:
        return self.num_models() > 0

    def __iter__(self) -> Iterator[DecisionTreeModel]:
        return (m.model for m in self.members)

    def train_model(self, examples: DatasetView, class_attribute: EnumAttribute) -> None:
        result = generate_ensemble(examples, self.num_iterations, class_attribute,
                                   self.max_depth, self.rng)
        self.members = list(result.members)
        self.termination_reason = result.reason
        self.error = None

    def classify(self, instance: Instance, class_attribute: EnumAttribute) -> Value:
        return classify_ensemble(self.members, instance, class_attribute)

    def __str__(self):
        return "\n".join(f"error={m.error:.4f}\n{m.model}" for m in self.members)
