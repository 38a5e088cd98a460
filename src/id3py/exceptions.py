"""Error types raised by the dataset and learning layers."""
from __future__ import annotations


class ID3Error(Exception):
    """Base class for all errors raised by id3py."""


class InvalidAttributeValue(ID3Error, ValueError):
    """A value outside an attribute's declared domain was inserted."""

    def __init__(self, attribute, value):
        self.attribute = attribute
        self.value = value
        super().__init__(f"value {value!r} is not allowed for attribute {attribute!r}")


class IndexOutOfRange(ID3Error, IndexError):
    """A view accessor was called with an index outside ``[0, count)``."""

    def __init__(self, kind: str, index: int, count: int):
        self.kind = kind
        self.index = index
        self.count = count
        super().__init__(f"{kind} index {index} out of range [0, {count})")


class EmptyDatasetError(ID3Error, ValueError):
    """A weight or evaluation operation was applied to a view without instances."""


class UnseenValueError(ID3Error, LookupError):
    """Classification reached a node with no child for the instance's value.

    Raised when the instance holds a value the tree was never trained on at
    that node (or no value at all for the decision attribute).  Callers decide
    whether to fall back to a default prediction.
    """

    def __init__(self, attribute, value):
        self.attribute = attribute
        self.value = value
        super().__init__(f"no trained branch for {attribute!r} = {value!r}")
