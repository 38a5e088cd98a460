"""Command line interface: evaluate and inspect ID3 models on ARFF files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import typer
from rich import print

from . import __version__, arff
from .boosting import BoostingForestModel
from .tree import DecisionTreeModel
from .validation import stratified_cross_validation

app = typer.Typer(help="ID3 decision trees and boosted forests for nominal ARFF data")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _load(path: Path):
    try:
        return arff.load(path)
    except arff.ArffParseError as exc:
        print(f"[red]{path}: {exc}[/red]")
        raise typer.Exit(code=1)


@app.command()
def version():
    print(f"id3py {__version__}")


@app.command()
def evaluate(
    dataset_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="ARFF file"),
    max_depth: int = typer.Option(..., "--max-depth", "-d", help="maximum tree depth (<= 0: skip training)"),
    folds: int = typer.Option(10, "--folds", "-k", min=2, help="number of cross-validation folds"),
    boosting: int = typer.Option(0, "--boosting", "-b", help="boosting iterations (0: single tree)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Stratified cross-validation of a tree (or boosted forest) on DATASET_PATH.
    The last attribute is the class.
    """
    _configure_logging(verbose)
    dataset = _load(dataset_path)
    class_attribute = dataset.last_attribute()
    if class_attribute is None or not dataset.has_instances():
        print(f"[red]{dataset_path}: no attributes or no instances[/red]")
        raise typer.Exit(code=1)

    print(f"Dataset: {dataset.name}")
    print(f"Number of Folds: {folds}")
    print(f"MaxDepth: {max_depth}")
    if max_depth <= 0:
        print("[yellow]max depth <= 0, nothing to train[/yellow]")
        return

    rng = np.random.default_rng(seed)
    if boosting > 0:
        print(f"Boosting Iterations: {boosting}")
        model = BoostingForestModel(boosting, max_depth, rng=rng)
    else:
        model = DecisionTreeModel(max_depth)
    try:
        result = stratified_cross_validation(dataset, class_attribute, model, folds, rng)
    except ValueError as exc:
        print(f"[red]{dataset_path}: {exc}[/red]")
        raise typer.Exit(code=1)
    print(f"Accuracy: {result}")


@app.command()
def tree(
    dataset_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="ARFF file"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", "-d", help="maximum tree depth"),
    rules: bool = typer.Option(False, "--rules", help="print rules instead of the tree"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Train one tree on all of DATASET_PATH and print it.
    """
    _configure_logging(verbose)
    dataset = _load(dataset_path)
    class_attribute = dataset.last_attribute()
    if class_attribute is None or not dataset.has_instances():
        print(f"[red]{dataset_path}: no attributes or no instances[/red]")
        raise typer.Exit(code=1)
    if max_depth is not None and max_depth <= 0:
        print("[yellow]max depth <= 0, nothing to train[/yellow]")
        return

    model = DecisionTreeModel(max_depth)
    model.train_model(dataset, class_attribute)
    if rules:
        for rule in model.export_rules():
            print(rule)
    else:
        print(str(model), end="")
    accuracy = model.test_model(dataset, class_attribute)
    print(f"Training accuracy: {accuracy:.4f}")


def main():
    app()


if __name__ == "__main__":
    main()
