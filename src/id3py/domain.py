# -*- coding: utf-8 -*-
"""
id3py.domain
============

Typed building blocks of a nominal dataset: attributes (columns), values and
instances (rows).

An :class:`Attribute` is only meta information: it names a column and decides
which values are admissible.  :class:`EnumAttribute` restricts the column to a
finite, ordered domain.  The domain order is significant: measures, tree
induction and ensemble voting all break ties by the first value in declaration
order.

A :class:`Value` wraps a single comparable scalar together with a mutable
weight.  Equality, hashing and ordering only look at the scalar, so a value can
be used as a dictionary key regardless of its current weight.

An :class:`Instance` maps attributes to values and carries one mutable weight.
Instances are owned by a :class:`~id3py.dataset.Dataset` and shared, never
copied, by every view built on top of it.  Changing a weight through one view
is therefore visible through all of them.
"""
from __future__ import annotations

from functools import total_ordering
from typing import Any, Iterable, Iterator

import numpy as np

from .exceptions import InvalidAttributeValue


def _as_scalar(v: Any) -> Any:
    # numpy scalars (np.str_, np.int64, ...) become plain Python scalars
    if isinstance(v, np.generic):
        return v.item()
    return v


# -----------------------------------------------------------------------------
# Value
# -----------------------------------------------------------------------------
@total_ordering
class Value:
    """A comparable scalar with a mutable weight.

    Parameters
    ----------
    value : hashable, comparable scalar
        The wrapped value, e.g. ``"sunny"``.
    weight : float, default=1.0
        Per-occurrence weight.  Not part of equality.
    """

    __slots__ = ("value", "weight")

    def __init__(self, value: Any, weight: float = 1.0):
        if value is None:
            raise ValueError("Value cannot wrap None")
        if isinstance(value, Value):
            value = value.value
        self.value = _as_scalar(value)
        self.weight = float(weight)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.value < other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"Value({self.value!r})"

    def __str__(self):
        return str(self.value)

    def copy(self) -> "Value":
        return Value(self.value, self.weight)

    def arff_string(self) -> str:
        return str(self.value)


def as_value(v: Any) -> Value:
    """Wrap ``v`` into a :class:`Value` unless it already is one."""
    return v if isinstance(v, Value) else Value(v)


# -----------------------------------------------------------------------------
# Attributes
# -----------------------------------------------------------------------------
class Attribute:
    """A named column.  Accepts any value.

    Two attributes are equal when their names are equal, so an attribute can
    be looked up in an instance through any object carrying the same name.
    """

    def __init__(self, name: str):
        if not name:
            raise ValueError("attribute name must be a non-empty string")
        self.name = str(name)

    def is_allowed(self, value: Value) -> bool:
        return True

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"

    def __str__(self):
        return self.name


class EnumAttribute(Attribute):
    """An attribute with a finite, ordered list of admissible values.

    Parameters
    ----------
    name : str
        Attribute name.
    values : iterable
        The domain, in declaration order.  Raw scalars are wrapped into
        :class:`Value`.  Duplicates are rejected.

    Iterating over the attribute yields the domain in declaration order.
    """

    def __init__(self, name: str, values: Iterable[Any] = ()):
        super().__init__(name)
        self._values: list[Value] = []
        for v in values:
            self.add_value(v)

    def add_value(self, value: Any) -> None:
        """Append ``value`` to the end of the domain."""
        value = as_value(value)
        if value in self._values:
            raise ValueError(f"duplicate value {value} in domain of {self.name!r}")
        self._values.append(value)

    def is_allowed(self, value: Value) -> bool:
        return as_value(value) in self._values

    @property
    def values(self) -> list[Value]:
        return list(self._values)

    def num_values(self) -> int:
        return len(self._values)

    def value(self, index: int) -> Value:
        return self._values[index]

    def __iter__(self) -> Iterator[Value]:
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def arff_string(self) -> str:
        """Return ``@attribute name {v0, v1, ...}``."""
        domain = ", ".join(v.arff_string() for v in self._values)
        return f"@attribute {self.name} {{{domain}}}"


# -----------------------------------------------------------------------------
# Instance
# -----------------------------------------------------------------------------
class Instance:
    """A row: a mapping from attributes to values plus a mutable weight.

    Parameters
    ----------
    entries : mapping or iterable of (Attribute, value) pairs, optional
        Initial entries.  Every entry goes through :meth:`add`, so values are
        checked against the attribute's domain.
    weight : float, default=1.0
        Instance weight, shared by every view that references this instance.
    """

    def __init__(self, entries=None, weight: float = 1.0):
        self._values: dict[Attribute, Value] = {}
        self.weight = float(weight)
        if entries is not None:
            items = entries.items() if hasattr(entries, "items") else entries
            for attribute, value in items:
                self.add(attribute, value)

    def add(self, attribute: Attribute, value: Any) -> None:
        """Set the value for ``attribute``, replacing any previous one.

        Raises
        ------
        InvalidAttributeValue
            If ``attribute`` does not admit ``value``.
        """
        value = as_value(value)
        if not attribute.is_allowed(value):
            raise InvalidAttributeValue(attribute, value)
        self._values[attribute] = value

    def add_unchecked(self, attribute: Attribute, value: Any) -> None:
        """Set the value for ``attribute`` without the domain check.

        Only meant for inference-time inputs, which may legitimately hold
        categories the model has never seen.
        """
        self._values[attribute] = as_value(value)

    def has_attribute(self, attribute: Attribute) -> bool:
        return attribute in self._values

    def value(self, attribute: Attribute) -> Value | None:
        """Return the value at ``attribute`` or ``None`` if absent."""
        return self._values.get(attribute)

    def attributes(self) -> list[Attribute]:
        return list(self._values)

    def multiply_weight(self, factor: float) -> float:
        """Multiply the weight by ``factor`` and return the new weight."""
        self.weight *= factor
        return self.weight

    def to_string(self, attributes: Iterable[Attribute]) -> str:
        return ",".join(
            str(self._values[a]) if a in self._values else "---" for a in attributes
        )

    def arff_string(self, attributes: Iterable[Attribute]) -> str:
        cells = []
        for a in attributes:
            if a not in self._values:
                raise ValueError(f"instance has no value for attribute {a.name!r}")
            cells.append(self._values[a].arff_string())
        return ",".join(cells)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"Instance({self.to_string(self._values)}, weight={self.weight:g})"
