# -*- coding: utf-8 -*-
"""
id3py.tree
==========

This module implements ID3 decision-tree induction over nominal dataset views,
the common :class:`DecisionModel` interface shared by single trees and boosted
forests, and a handful of helpers to render a trained tree (indented text,
rule export and Graphviz export).

A tree is made of two node types.  :class:`InnerNode` holds a decision
attribute and one child per value of that attribute's domain; :class:`Leaf`
holds a single class value.  Induction (:func:`build_tree`) greedily picks the
candidate attribute with the highest information gain, partitions the view
with :class:`~id3py.views.PredicateView` and recurses until the partition is
class-pure, the candidates are exhausted or ``max_depth`` is reached.

Candidate attributes are always visited in declaration order and the first
attribute reaching the maximum gain wins, so training is reproducible.
"""

# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from .domain import EnumAttribute, Instance, Value, as_value
from .exceptions import EmptyDatasetError, InvalidAttributeValue, UnseenValueError
from .measures import ClassificationResult, entropy, information_gain, mean_dev, most_common_value
from .views import DatasetView, IndexedView, PredicateView

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Nodes
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Leaf:
    """Terminal node predicting ``value``."""

    value: Value


@dataclass
class InnerNode:
    """Decision node splitting on ``decision_attribute``.

    Attributes
    ----------
    decision_attribute : EnumAttribute
        The attribute tested at this node.
    children : dict
        Mapping ``{Value: Node}``, at most one entry per domain value.
    """

    decision_attribute: EnumAttribute
    children: dict = field(default_factory=dict)

    def add_child(self, value, child: "Node") -> None:
        value = as_value(value)
        if not self.decision_attribute.is_allowed(value):
            raise InvalidAttributeValue(self.decision_attribute, value)
        self.children[value] = child

    def child(self, value) -> "Node | None":
        if value is None:
            return None
        return self.children.get(as_value(value))


Node = Union[InnerNode, Leaf]


def depth(node: Node) -> int:
    """Number of levels below and including ``node`` (a leaf has depth 1)."""
    if isinstance(node, Leaf):
        return 1
    return 1 + max((depth(ch) for ch in node.children.values()), default=0)


def n_leaves(node: Node) -> int:
    if isinstance(node, Leaf):
        return 1
    return sum(n_leaves(ch) for ch in node.children.values())


# -----------------------------------------------------------------------------
# Induction
# -----------------------------------------------------------------------------
def select_partition_attribute(view: DatasetView, class_attribute: EnumAttribute,
                               candidates: Sequence[EnumAttribute]) -> EnumAttribute | None:
    """Return the candidate with maximum information gain.

    ``candidates`` is scanned in order with a strict ``>`` comparison, so the
    first attribute reaching the maximum is returned.
    """
    best, best_gain = None, -np.inf
    for attribute in candidates:
        gain = information_gain(view, class_attribute, attribute)
        if gain > best_gain:
            best, best_gain = attribute, gain
    return best


def build_tree(view: DatasetView, class_attribute: EnumAttribute,
               candidates: Sequence[EnumAttribute], depth: int = 1,
               max_depth: int | None = None) -> Node:
    """
    Recursively build an ID3 (sub-)tree from ``view``.

    Parameters
    ----------
    view : DatasetView
        The (non-empty) training instances reaching this node.
    class_attribute : EnumAttribute
        The target attribute.
    candidates : sequence of EnumAttribute
        Attributes still available for splitting, in canonical order.
    depth : int, default=1
        Depth of the node being built.  The root is at depth 1.
    max_depth : int or None
        Depth at which a leaf is forced.  ``None`` means unbounded.

    Returns
    -------
    Node
        A leaf, or an inner node with one child per domain value of the
        selected attribute.
    """
    if entropy(view, class_attribute) == 0:
        # class-pure
        return Leaf(view.instance_at(0).value(class_attribute))

    if not candidates or (max_depth is not None and depth >= max_depth):
        return Leaf(most_common_value(view, class_attribute))

    attribute = select_partition_attribute(view, class_attribute, candidates)
    logger.debug("depth %d: splitting %d instances on %s", depth, view.num_instances(), attribute)
    node = InnerNode(attribute)
    remaining = [a for a in candidates if a != attribute]

    for value in attribute:
        subset = PredicateView.select_instances(view, attribute, value)
        if subset.has_instances():
            node.add_child(value, build_tree(subset, class_attribute, remaining, depth + 1, max_depth))
        else:
            # no training instance with this value: use the parent's majority
            node.add_child(value, Leaf(most_common_value(view, class_attribute)))
    return node


def classify_instance(root: Node, instance: Instance) -> Value:
    """Follow ``instance`` from ``root`` down to a leaf and return its value.

    Raises
    ------
    UnseenValueError
        If a node has no child for the instance's value of its decision
        attribute.
    """
    node = root
    while not isinstance(node, Leaf):
        value = instance.value(node.decision_attribute)
        child = node.child(value)
        if child is None:
            raise UnseenValueError(node.decision_attribute, value)
        node = child
    return node.value


# -----------------------------------------------------------------------------
# Model interface
# -----------------------------------------------------------------------------
class DecisionModel(ABC):
    """
    Common interface of trainable classifiers over dataset views.

    Both :class:`DecisionTreeModel` and
    :class:`~id3py.boosting.BoostingForestModel` implement it, so evaluation
    code (cross-validation, repeated random splits, boosting itself) never
    needs to know which kind of model it drives.

    Attributes
    ----------
    error : float or None
        ``1 - accuracy`` of the last :meth:`test_model` call, ``None`` after
        (re)training.
    """

    def __init__(self):
        self.error: float | None = None

    @abstractmethod
    def train_model(self, examples: DatasetView, class_attribute: EnumAttribute) -> None:
        """Train on ``examples``, replacing any previous state."""

    @abstractmethod
    def classify(self, instance: Instance, class_attribute: EnumAttribute) -> Value:
        """Return the value predicted for ``instance``."""

    def test(self, instance: Instance, class_attribute: EnumAttribute) -> bool:
        """Whether the prediction for ``instance`` equals its class value.

        An instance the model cannot route (:class:`UnseenValueError`) counts
        as misclassified.
        """
        try:
            predicted = self.classify(instance, class_attribute)
        except UnseenValueError as exc:
            logger.debug("counting instance as misclassified: %s", exc)
            return False
        return predicted == instance.value(class_attribute)

    def test_model(self, test_set: DatasetView, class_attribute: EnumAttribute) -> float:
        """
        Return the fraction of correctly classified instances of ``test_set``.

        Also stores ``1 - accuracy`` in :attr:`error`.

        Raises
        ------
        EmptyDatasetError
            If ``test_set`` has no instances.
        """
        n = test_set.num_instances()
        if n == 0:
            raise EmptyDatasetError("test_model requires at least one instance")
        correct = sum(1 for inst in test_set.instances() if self.test(inst, class_attribute))
        accuracy = correct / n
        self.error = 1.0 - accuracy
        return accuracy

    def train_model_on_subset(self, examples: DatasetView, indices: Sequence[int],
                              class_attribute: EnumAttribute) -> None:
        self.train_model(IndexedView(examples, indices), class_attribute)

    def test_model_on_subset(self, examples: DatasetView, indices: Sequence[int],
                             class_attribute: EnumAttribute) -> float:
        return self.test_model(IndexedView(examples, indices), class_attribute)

    def train_and_test_model(self, dataset: DatasetView, training_ratio: float, repeats: int,
                             class_attribute: EnumAttribute,
                             rng: np.random.Generator | None = None) -> ClassificationResult:
        """
        Train and test ``repeats`` times on fresh random splits.

        Parameters
        ----------
        dataset : DatasetView
            Instances to split into training and test views each round.
        training_ratio : float
            Fraction of instances used for training.
        repeats : int
            Number of train/test cycles.
        class_attribute : EnumAttribute
            The target attribute.
        rng : Generator, optional
            Source of randomness for the splits.

        Returns
        -------
        ClassificationResult
            Mean and standard deviation of the test accuracies.
        """
        accuracies = []
        for _ in range(int(repeats)):
            split = dataset.random_split(training_ratio, rng)
            self.train_model(split.training_set, class_attribute)
            accuracies.append(self.test_model(split.test_set, class_attribute))
        return mean_dev(accuracies)

    def print(self) -> None:
        print(str(self))


class DecisionTreeModel(DecisionModel):
    """
    A single ID3 decision tree.

    Parameters
    ----------
    max_depth : int or None, default=None
        Maximum depth of the tree, counting the root as depth 1.  A tree with
        ``max_depth=1`` is a single leaf.  ``None`` leaves the depth bounded
        only by the number of attributes.
    """

    def __init__(self, max_depth: int | None = None):
        super().__init__()
        if max_depth is not None and int(max_depth) < 1:
            raise ValueError("max_depth must be >= 1 or None")
        self.max_depth = None if max_depth is None else int(max_depth)
        self.root: Node | None = None

    def train_model(self, examples: DatasetView, class_attribute: EnumAttribute) -> None:
        """Build the tree from all attributes of ``examples`` except the class."""
        if not examples.has_instances():
            raise EmptyDatasetError("cannot train a decision tree on an empty view")
        candidates = examples.attribute_list(class_attribute)
        self.root = build_tree(examples, class_attribute, candidates, 1, self.max_depth)
        self.error = None

    def classify(self, instance: Instance, class_attribute: EnumAttribute) -> Value:
        if self.root is None:
            raise ValueError("Model not trained. Call train_model(...) first.")
        return classify_instance(self.root, instance)

    def depth(self) -> int:
        return 0 if self.root is None else depth(self.root)

    def export_rules(self) -> list[str]:
        if self.root is None:
            raise ValueError("Model not trained. Call train_model(...) first.")
        return export_rules(self.root)

    def export_graphviz(self, filename: str | None = None, format: str = "png") -> str:
        if self.root is None:
            raise ValueError("Model not trained. Call train_model(...) first.")
        return export_graphviz(self.root, filename, format=format)

    def __str__(self):
        return "<untrained>" if self.root is None else tree_string(self.root)


# -----------------------------------------------------------------------------
# Rendering helpers
# -----------------------------------------------------------------------------
def tree_string(root: Node) -> str:
    """Render a tree as indented text, one ``| `` per level."""
    lines: list[str] = []

    def visit(node: Node, prefix: str, level: int):
        if isinstance(node, Leaf):
            lines.append(f"{prefix}{node.value}")
            return
        lines.append(f"{prefix}{node.decision_attribute.name}")
        for value, child in node.children.items():
            visit(child, "| " * (level + 1) + f"{value}:", level + 1)

    visit(root, "", 0)
    return "\n".join(lines) + "\n"


def export_rules(root: Node) -> list[str]:
    """Return one ``a = v AND ... => class`` string per leaf."""
    rules: list[str] = []

    def collect(node: Node, parts: list[str]):
        if isinstance(node, Leaf):
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {node.value}")
            return
        for value, child in node.children.items():
            collect(child, parts + [f"{node.decision_attribute.name} = {value}"])

    collect(root, [])
    return rules


def export_graphviz(root: Node, filename: str | None = None, *, format: str = "png") -> str:
    """
    Export the tree structure in Graphviz format.

    Requires the optional `graphviz` Python package.  When ``filename`` is
    None the DOT source is returned.  With ``format='dot'`` the DOT source is
    written to ``<filename>.dot`` without calling the external ``dot`` binary;
    other formats are rendered through it.

    Returns
    -------
    str
        Path to the written file, or the DOT source code if filename is None.
    """
    try:
        import graphviz
    except ImportError:
        raise RuntimeError("Graphviz is required for export_graphviz but not installed.")
    dot = graphviz.Digraph(format=format)

    def add(node: Node, name: str):
        if isinstance(node, Leaf):
            dot.node(name, str(node.value), shape="box", style="filled", color="lightgrey")
            return
        dot.node(name, node.decision_attribute.name, shape="ellipse", style="filled",
                 color="lightblue")
        for i, (value, child) in enumerate(node.children.items()):
            child_name = f"{name}_{i}"
            add(child, child_name)
            dot.edge(name, child_name, label=str(value))

    add(root, "n0")
    if filename is None:
        return dot.source
    if format.lower() == "dot":
        path = f"{filename}.dot"
        dot.save(path)
        return path
    dot.render(filename, cleanup=True)
    return f"{filename}.{format}"
