# -*- coding: utf-8 -*-
"""
id3py.views
===========

Read-only, non-copying projections over a dataset.

Every view answers four primitive questions: how many attributes and instances
it has, and which attribute or instance sits at a given position.  Everything
else (iteration, attribute selection, weight bookkeeping, splitting and
bootstrap sampling) is written in terms of those four accessors, so a new view
type only has to implement them.

Views never own instance data.  An :class:`IndexedView` stores a list of
positions into its base view and forwards lookups, and the other decorators
are index views with a particular way of computing that list.  Several views
can therefore reference the same :class:`~id3py.domain.Instance` objects, and a
weight changed through one of them is seen by all others.  Boosting relies on
that: it reweights the shared dataset between rounds.

Views are not thread safe.  Sharing a dataset and its views between threads
that mutate weights is unsupported.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, NamedTuple, Sequence

import numpy as np

from . import sampling
from .domain import Attribute, EnumAttribute, Instance, as_value
from .exceptions import EmptyDatasetError, IndexOutOfRange


class DatasetView(ABC):
    """Abstract read interface shared by datasets and all derived views."""

    def __init__(self, name: str = "unnamed"):
        self.name = name

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    @abstractmethod
    def num_attributes(self) -> int: ...

    @abstractmethod
    def num_instances(self) -> int: ...

    @abstractmethod
    def _attribute_at(self, index: int) -> EnumAttribute: ...

    @abstractmethod
    def _instance_at(self, index: int) -> Instance: ...

    def attribute_at(self, index: int) -> EnumAttribute:
        n = self.num_attributes()
        if not 0 <= index < n:
            raise IndexOutOfRange("attribute", index, n)
        return self._attribute_at(index)

    def instance_at(self, index: int) -> Instance:
        n = self.num_instances()
        if not 0 <= index < n:
            raise IndexOutOfRange("instance", index, n)
        return self._instance_at(index)

    # ------------------------------------------------------------------
    # Derived accessors
    # ------------------------------------------------------------------
    def has_attributes(self) -> bool:
        return self.num_attributes() > 0

    def has_instances(self) -> bool:
        return self.num_instances() > 0

    def attributes(self) -> Iterator[EnumAttribute]:
        for i in range(self.num_attributes()):
            yield self.attribute_at(i)

    def instances(self) -> Iterator[Instance]:
        for i in range(self.num_instances()):
            yield self.instance_at(i)

    def __iter__(self) -> Iterator[Instance]:
        return self.instances()

    def __len__(self) -> int:
        return self.num_instances()

    def attribute_list(self, *exclude: Attribute) -> list[EnumAttribute]:
        """Return the attributes in declaration order, minus ``exclude``."""
        return [a for a in self.attributes() if a not in exclude]

    def last_attribute(self) -> EnumAttribute | None:
        """Return the last attribute (conventionally the class), or ``None``."""
        return self.attribute_at(self.num_attributes() - 1) if self.has_attributes() else None

    def select(self, attribute: Attribute, value) -> "PredicateView":
        """Return the instances whose value at ``attribute`` equals ``value``."""
        return PredicateView.select_instances(self, attribute, value)

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------
    def random_split(self, ratio: float, rng: np.random.Generator | None = None) -> "DatasetSplit":
        """Split this view randomly into a training and a test view.

        ``ratio`` is the fraction of instances that go to the training view.
        """
        split = sampling.random_split(ratio, self.num_instances(), rng)
        return DatasetSplit(IndexedView(self, split.first), IndexedView(self, split.second))

    def weighted_bootstrap_sampling(self, rng: np.random.Generator | None = None) -> "IndexedView":
        """Normalise weights, then draw ``n`` instances with replacement.

        Each instance is drawn with probability proportional to its weight.
        The returned view references the same instances as this one.
        """
        self.normalize_weights()
        distribution = sampling.build_distribution(inst.weight for inst in self.instances())
        return IndexedView(self, sampling.weighted_bootstrap(distribution, rng))

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------
    def _require_instances(self, operation: str) -> None:
        if not self.has_instances():
            raise EmptyDatasetError(f"{operation} requires at least one instance")

    def sum_weights(self) -> float:
        self._require_instances("sum_weights")
        return float(sum(inst.weight for inst in self.instances()))

    def assign_equal_weights(self) -> None:
        """Set every instance weight to ``1 / num_instances()``."""
        self._require_instances("assign_equal_weights")
        w = 1.0 / self.num_instances()
        for inst in self.instances():
            inst.weight = w

    def normalize_weights(self) -> None:
        """Scale the weights so that they sum to one."""
        self._require_instances("normalize_weights")
        total = self.sum_weights()
        if total <= 0:
            raise ValueError(f"cannot normalise weights that sum to {total}")
        factor = 1.0 / total
        for inst in self.instances():
            inst.multiply_weight(factor)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def to_arff(self) -> str:
        from .arff import dumps
        return dumps(self)

    def __str__(self):
        attributes = list(self.attributes())
        lines = [",".join(a.name for a in attributes)]
        lines.extend(inst.to_string(attributes) for inst in self.instances())
        return "\n".join(lines)

    def __repr__(self):
        return (f"{type(self).__name__}(name={self.name!r}, "
                f"attributes={self.num_attributes()}, instances={self.num_instances()})")


class DatasetSplit(NamedTuple):
    """A training view and a test view over the same base."""

    training_set: DatasetView
    test_set: DatasetView


# -----------------------------------------------------------------------------
# Decorators
# -----------------------------------------------------------------------------
class IndexedView(DatasetView):
    """A view selecting instances of ``base`` through a list of indices.

    Indices may repeat (bootstrap samples) and may come in any order.
    """

    def __init__(self, base: DatasetView, indices: Iterable[int]):
        super().__init__(base.name)
        self._base = base
        self._indices = [int(i) for i in indices]

    @property
    def base(self) -> DatasetView:
        return self._base

    @property
    def indices(self) -> list[int]:
        return list(self._indices)

    def num_attributes(self) -> int:
        return self._base.num_attributes()

    def num_instances(self) -> int:
        return len(self._indices)

    def _attribute_at(self, index: int) -> EnumAttribute:
        return self._base.attribute_at(index)

    def _instance_at(self, index: int) -> Instance:
        return self._base.instance_at(self._indices[index])


class PredicateView(IndexedView):
    """A view on the instances of ``base`` that satisfy ``predicate``.

    The predicate is evaluated once, at construction time.
    """

    def __init__(self, base: DatasetView, predicate: Callable[[Instance], bool]):
        super().__init__(base, self._valid_indices(base, predicate))

    @staticmethod
    def _valid_indices(base: DatasetView, predicate: Callable[[Instance], bool]) -> list[int]:
        return [i for i in range(base.num_instances()) if predicate(base.instance_at(i))]

    @classmethod
    def select_instances(cls, view: DatasetView, attribute: Attribute, value) -> "PredicateView":
        """Select all instances of ``view`` holding ``value`` at ``attribute``."""
        value = as_value(value)
        return cls(view, lambda inst: value == inst.value(attribute))


class RangeView(IndexedView):
    """The contiguous instances ``[from_index, to_index)`` of ``base``."""

    def __init__(self, base: DatasetView, from_index: int, to_index: int):
        super().__init__(base, sampling.range_indices(from_index, to_index))


class ShuffleView(IndexedView):
    """All instances of ``base`` in a uniformly random order."""

    def __init__(self, base: DatasetView, rng: np.random.Generator | None = None):
        super().__init__(base, sampling.shuffle_indices(base.num_instances(), rng))


class ListView(DatasetView):
    """Concatenation of views that share one attribute schema.

    ``instance_at(i)`` walks the views in order, subtracting each view's
    instance count until the owning view is found.  Counts are read from the
    siblings on every call, so a sibling that grows later is seen in full.
    """

    def __init__(self, views: Sequence[DatasetView] = (), name: str | None = None):
        super().__init__(name if name is not None else (views[0].name if views else "unnamed"))
        self._views: list[DatasetView] = []
        for v in views:
            self.append(v)

    def append(self, view: DatasetView) -> None:
        if self._views and view.attribute_list() != self._views[0].attribute_list():
            raise ValueError("all views of a ListView must share the same attributes")
        self._views.append(view)

    @property
    def views(self) -> list[DatasetView]:
        return list(self._views)

    def num_attributes(self) -> int:
        return self._views[0].num_attributes() if self._views else 0

    def num_instances(self) -> int:
        return sum(v.num_instances() for v in self._views)

    def _attribute_at(self, index: int) -> EnumAttribute:
        return self._views[0].attribute_at(index)

    def _instance_at(self, index: int) -> Instance:
        for view in self._views:
            n = view.num_instances()
            if index < n:
                return view.instance_at(index)
            index -= n
        raise IndexOutOfRange("instance", index, self.num_instances())
