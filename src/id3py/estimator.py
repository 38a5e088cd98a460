# -*- coding: utf-8 -*-
"""
id3py.estimator
===============

A scikit-learn style front end for the ID3 engine.

:class:`ID3Classifier` accepts array-like inputs of nominal values (strings,
integers, booleans), turns every column into an
:class:`~id3py.domain.EnumAttribute` whose domain is the sorted set of values
seen during ``fit``, and trains either a single
:class:`~id3py.tree.DecisionTreeModel` (``trials=1``) or a boosted
:class:`~id3py.boosting.BoostingForestModel` (``trials>1``).

Rule export, pretty printing and Graphviz export are only available when
``trials=1``; a boosted ensemble has no single tree to unroll.
"""

# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin

from .boosting import BoostingForestModel
from .dataset import Dataset
from .domain import EnumAttribute, Instance
from .exceptions import UnseenValueError
from .measures import most_common_value
from .tree import DecisionTreeModel

logger = logging.getLogger(__name__)


class ID3Classifier(BaseEstimator, ClassifierMixin):
    """
    ID3 decision tree classifier for purely nominal features.

    Parameters
    ----------
    trials : int, default=1
        Number of boosting rounds.  A value of 1 fits a single tree; larger
        values fit a boosted ensemble that may stop early on a perfect or a
        too-weak member.
    max_depth : int or None, default=None
        Maximum depth of every tree, the root counting as depth 1.  ``None``
        leaves the depth bounded by the number of features.
    random_state : int or None, default=None
        Seed for the bootstrap draws of boosting.  Ignored when ``trials=1``.
    feature_names : list[str] or None, default=None
        Names for the feature columns.  Defaults to ``f0, f1, ...``.

    Attributes
    ----------
    classes_ : ndarray
        Sorted class labels seen during ``fit``.
    model_ : DecisionTreeModel or BoostingForestModel
        The trained model.
    dataset_ : Dataset
        Training data as a dataset (features followed by the class column).
    class_attribute_ : EnumAttribute
        The target attribute.
    fallback_ : object
        Majority class of the training data, predicted for inputs holding a
        category the model cannot route.
    """

    def __init__(
        self,
        *,
        trials: int = 1,
        max_depth: int | None = None,
        random_state: int | None = None,
        feature_names: list[str] | None = None,
    ):
        self.trials = trials
        self.max_depth = max_depth
        self.random_state = random_state
        self.feature_names = feature_names

    def fit(self, X, y, feature_names=None):
        X = np.asarray(X, dtype=object)
        y = np.asarray(y, dtype=object)
        if X.ndim != 2:
            raise ValueError("X must be a 2-dimensional array")
        if len(X) != len(y):
            raise ValueError("X and y must have the same number of rows")
        if len(y) == 0:
            raise ValueError("cannot fit on an empty dataset")
        if int(self.trials) < 1:
            raise ValueError("trials must be >= 1")

        n_features = X.shape[1]
        names = feature_names if feature_names is not None else self.feature_names
        if names is None:
            names = [f"f{i}" for i in range(n_features)]
        if len(names) != n_features:
            raise ValueError("feature_names length must match X.shape[1]")
        self.feature_names_ = list(names)
        self.n_features_in_ = n_features

        self.classes_ = np.array(sorted(set(y.tolist())))
        self.feature_attributes_ = [
            EnumAttribute(name, sorted(set(X[:, j].tolist())))
            for j, name in enumerate(self.feature_names_)
        ]
        target = "class"
        while target in self.feature_names_:
            target += "_"
        self.class_attribute_ = EnumAttribute(target, self.classes_.tolist())

        dataset = Dataset(*self.feature_attributes_, self.class_attribute_, name="fit")
        for row, label in zip(X, y):
            dataset.add_row(list(row) + [label])
        self.dataset_ = dataset
        self.fallback_ = most_common_value(dataset, self.class_attribute_).value

        if int(self.trials) == 1:
            self.model_ = DecisionTreeModel(self.max_depth)
        else:
            self.model_ = BoostingForestModel(
                int(self.trials), self.max_depth, rng=np.random.default_rng(self.random_state)
            )
        self.model_.train_model(dataset, self.class_attribute_)
        return self

    def _check_fitted(self):
        if getattr(self, "model_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def _instance(self, row) -> Instance:
        inst = Instance()
        for attribute, v in zip(self.feature_attributes_, row):
            inst.add_unchecked(attribute, v)
        return inst

    def predict(self, X):
        """
        Predict class labels for the provided samples.

        Inputs holding a category that the model has no branch for are
        assigned the training majority class (``fallback_``).

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)

        Returns
        -------
        ndarray of shape (n_samples,)
        """
        self._check_fitted()
        X = np.asarray(X, dtype=object)
        if X.ndim != 2 or X.shape[1] != self.n_features_in_:
            raise ValueError(f"X must have shape (n_samples, {self.n_features_in_})")
        out = []
        for row in X:
            try:
                out.append(self.model_.classify(self._instance(row), self.class_attribute_).value)
            except UnseenValueError as exc:
                logger.warning("%s; predicting majority class %r", exc, self.fallback_)
                out.append(self.fallback_)
        return np.array(out)

    def _single_tree(self, what: str) -> DecisionTreeModel:
        if int(self.trials) != 1:
            raise ValueError(f"{what} only available when trials=1")
        self._check_fitted()
        return self.model_

    def export_rules(self) -> list[str]:
        """Return one ``antecedent => class`` string per leaf (``trials=1`` only)."""
        return self._single_tree("export_rules").export_rules()

    def export_graphviz(self, filename: str | None = None, format: str = "png") -> str:
        """Graphviz export of the tree (``trials=1`` only).  See :func:`id3py.tree.export_graphviz`."""
        return self._single_tree("export_graphviz").export_graphviz(filename, format=format)

    def print_tree(self) -> None:
        """Pretty-print the decision tree to ``stdout`` (``trials=1`` only)."""
        self._single_tree("print_tree").print()
