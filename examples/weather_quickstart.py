from pathlib import Path
from time import perf_counter

import numpy as np

from id3py import BoostingForestModel, DecisionTreeModel, ID3Classifier, arff
from id3py.validation import stratified_cross_validation

here = Path(__file__).parent
dataset = arff.load(here / "weather.arff")
play = dataset.last_attribute()

# single tree on the view layer
tree = DecisionTreeModel()
t0 = perf_counter(); tree.train_model(dataset, play); print(f"train: {perf_counter()-t0:.3f} s")
tree.print()
for rule in tree.export_rules():
    print(rule)

rng = np.random.default_rng(42)
print("tree   ", stratified_cross_validation(dataset, play, DecisionTreeModel(3), 7, rng))
print("boosted", stratified_cross_validation(dataset, play, BoostingForestModel(10, 3, rng=rng), 7, rng))

# same data through the scikit-learn facade
rows = [[inst.value(a).value for a in dataset.attribute_list(play)] for inst in dataset]
labels = [inst.value(play).value for inst in dataset]
clf = ID3Classifier(feature_names=["outlook", "temperature", "humidity", "windy"]).fit(rows, labels)
print(clf.predict([["sunny", "cool", "high", "true"]]))
try:
    clf.export_graphviz("weather_tree", format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
