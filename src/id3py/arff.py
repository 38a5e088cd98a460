# -*- coding: utf-8 -*-
"""
id3py.arff
==========

Reader and writer for the nominal subset of the ARFF table format::

    % comment
    @relation weather

    @attribute outlook {sunny, overcast, rainy}
    @attribute play {yes, no}

    @data
    sunny,no
    overcast,yes

Only enumerated attribute domains are supported.  Directives are matched
case-insensitively; blank lines and ``%`` comments are ignored.
"""
from __future__ import annotations

import logging
import os
from typing import Iterable

from .dataset import Dataset
from .domain import EnumAttribute
from .exceptions import InvalidAttributeValue
from .views import DatasetView

logger = logging.getLogger(__name__)


class ArffParseError(ValueError):
    """Malformed ARFF input.

    Attributes
    ----------
    line_number : int
        1-based number of the offending line.
    line : str
        The offending line, stripped.
    description : str
        What is wrong with it.
    """

    def __init__(self, line_number: int, line: str, description: str):
        self.line_number = line_number
        self.line = line
        self.description = description
        super().__init__(f"line {line_number}: {description}: {line!r}")


def _parse_attribute(line_number: int, line: str) -> EnumAttribute:
    head, sep, rest = line.partition("{")
    if not sep or not rest.rstrip().endswith("}"):
        raise ArffParseError(line_number, line, "only enumerated {v1, ..., vk} domains are supported")
    parts = head.split(None, 1)
    if len(parts) != 2 or not parts[1].strip():
        raise ArffParseError(line_number, line, "missing attribute name")
    values = [v.strip() for v in rest.rstrip()[:-1].split(",")]
    if any(not v for v in values):
        raise ArffParseError(line_number, line, "empty value in attribute domain")
    try:
        return EnumAttribute(parts[1].strip(), values)
    except ValueError as exc:
        raise ArffParseError(line_number, line, str(exc)) from exc


def _parse_lines(lines: Iterable[str]) -> Dataset:
    dataset = Dataset()
    header = True
    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("%"):
            continue
        if header:
            directive = line.split(None, 1)[0].lower()
            if directive == "@relation":
                parts = line.split(None, 1)
                if len(parts) != 2:
                    raise ArffParseError(line_number, line, "missing relation name")
                dataset.name = parts[1].strip()
            elif directive == "@attribute":
                attribute = _parse_attribute(line_number, line)
                try:
                    dataset.add_attribute(attribute)
                except ValueError as exc:
                    raise ArffParseError(line_number, line, str(exc)) from exc
            elif directive == "@data":
                header = False
            elif line.startswith("@"):
                raise ArffParseError(line_number, line, f"unknown directive {directive}")
            else:
                raise ArffParseError(line_number, line, "data row before @data")
            continue

        cells = [c.strip() for c in line.split(",")]
        if len(cells) != dataset.num_attributes():
            raise ArffParseError(
                line_number, line,
                f"expected {dataset.num_attributes()} values, got {len(cells)}",
            )
        try:
            dataset.add_row(cells)
        except InvalidAttributeValue as exc:
            raise ArffParseError(line_number, line, str(exc)) from exc

    logger.debug("parsed relation %r: %d attributes, %d instances",
                 dataset.name, dataset.num_attributes(), dataset.num_instances())
    return dataset


def loads(text: str) -> Dataset:
    """Parse ARFF ``text`` into a new :class:`~id3py.dataset.Dataset`."""
    return _parse_lines(text.splitlines())


def load(path: str | os.PathLike) -> Dataset:
    """Parse the ARFF file at ``path``."""
    with open(path, encoding="utf-8") as fh:
        return _parse_lines(fh)


def dumps(view: DatasetView) -> str:
    """Serialize ``view`` (attributes and instances, not weights) to ARFF text."""
    attributes = list(view.attributes())
    lines = [f"@relation {view.name}", ""]
    lines.extend(a.arff_string() for a in attributes)
    lines.extend(["", "@data"])
    lines.extend(inst.arff_string(attributes) for inst in view.instances())
    return "\n".join(lines) + "\n"


def dump(view: DatasetView, path: str | os.PathLike) -> None:
    """Write ``view`` to ``path`` in ARFF format."""
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(dumps(view))
