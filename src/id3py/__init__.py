# id3py/__init__.py
"""
id3py: ID3 decision trees and boosted forests over nominal datasets.

Exports:
    - Dataset, EnumAttribute, Attribute, Value, Instance
    - DatasetView and its decorators (IndexedView, PredicateView, RangeView,
      ShuffleView, ListView)
    - DecisionTreeModel, BoostingForestModel
    - ID3Classifier (scikit-learn style)
"""
from .boosting import BoostingForestModel, TerminationReason, generate_ensemble
from .dataset import Dataset
from .domain import Attribute, EnumAttribute, Instance, Value
from .estimator import ID3Classifier
from .exceptions import (
    EmptyDatasetError,
    ID3Error,
    IndexOutOfRange,
    InvalidAttributeValue,
    UnseenValueError,
)
from .tree import DecisionModel, DecisionTreeModel, InnerNode, Leaf
from .views import DatasetView, IndexedView, ListView, PredicateView, RangeView, ShuffleView

__all__ = [
    "Attribute", "EnumAttribute", "Value", "Instance", "Dataset",
    "DatasetView", "IndexedView", "PredicateView", "RangeView", "ShuffleView", "ListView",
    "DecisionModel", "DecisionTreeModel", "InnerNode", "Leaf",
    "BoostingForestModel", "TerminationReason", "generate_ensemble",
    "ID3Classifier",
    "ID3Error", "InvalidAttributeValue", "IndexOutOfRange", "EmptyDatasetError", "UnseenValueError",
]
__version__ = "0.1.0"
