"""The owning dataset: the attribute list and the instance arena all views index into."""
from __future__ import annotations

from typing import Iterable

from .domain import EnumAttribute, Instance
from .exceptions import InvalidAttributeValue
from .views import DatasetView


class Dataset(DatasetView):
    """Attributes (columns) and instances (rows) of a nominal table.

    A dataset is built once, either directly or through
    :func:`id3py.arff.load`, and is append-only afterwards.  It is itself a
    :class:`~id3py.views.DatasetView`, so every view decorator and measure
    accepts it directly.

    Parameters
    ----------
    *attributes : EnumAttribute
        Initial attributes in declaration order.
    name : str, default="unnamed"
        Relation name, written back by the ARFF serializer.
    """

    def __init__(self, *attributes: EnumAttribute, name: str = "unnamed"):
        super().__init__(name)
        self._attributes: list[EnumAttribute] = []
        self._instances: list[Instance] = []
        self.add_attributes(*attributes)

    def add_attribute(self, attribute: EnumAttribute) -> None:
        if attribute in self._attributes:
            raise ValueError(f"duplicate attribute {attribute.name!r}")
        self._attributes.append(attribute)

    def add_attributes(self, *attributes: EnumAttribute) -> None:
        for a in attributes:
            self.add_attribute(a)

    def add_instance(self, instance: Instance) -> None:
        """Append ``instance``, checking its values against this dataset's domains.

        Raises
        ------
        InvalidAttributeValue
            If a value is outside the domain of the dataset's attribute of
            the same name.
        """
        for attribute in self._attributes:
            value = instance.value(attribute)
            if value is not None and not attribute.is_allowed(value):
                raise InvalidAttributeValue(attribute, value)
        self._instances.append(instance)

    def add_instances(self, instances: Iterable[Instance]) -> None:
        for inst in instances:
            self.add_instance(inst)

    def add_row(self, values: Iterable, weight: float = 1.0) -> Instance:
        """Append an instance built from ``values`` in attribute order.

        Raises
        ------
        ValueError
            If the number of values does not match the number of attributes.
        InvalidAttributeValue
            If a value is outside its attribute's domain.
        """
        values = list(values)
        if len(values) != len(self._attributes):
            raise ValueError(
                f"expected {len(self._attributes)} values, got {len(values)}"
            )
        instance = Instance(zip(self._attributes, values), weight=weight)
        self.add_instance(instance)
        return instance

    def attribute(self, name: str) -> EnumAttribute:
        """Return the attribute called ``name``."""
        for a in self._attributes:
            if a.name == name:
                return a
        raise KeyError(name)

    def num_attributes(self) -> int:
        return len(self._attributes)

    def num_instances(self) -> int:
        return len(self._instances)

    def _attribute_at(self, index: int) -> EnumAttribute:
        return self._attributes[index]

    def _instance_at(self, index: int) -> Instance:
        return self._instances[index]
