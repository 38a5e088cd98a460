import numpy as np
import pytest

from id3py import BoostingForestModel, DecisionTreeModel, EmptyDatasetError, Value, validation
from conftest import make_dataset


def _ids(view):
    return sorted(id(inst) for inst in view)


@pytest.mark.parametrize("n,k", [(14, 3), (10, 10), (7, 2), (3, 5)])
def test_train_and_test_folds_are_complementary(n, k):
    data = make_dataset({"cls": ["a", "b"]}, [["a" if i % 2 else "b"] for i in range(n)])
    seen = []
    for fold in range(k):
        train = validation.train_cv(data, fold, k)
        test = validation.test_cv(data, fold, k)
        assert train.num_instances() + test.num_instances() == n
        assert sorted(_ids(train) + _ids(test)) == _ids(data)
        seen.extend(id(inst) for inst in test)
    # every instance is tested exactly once
    assert sorted(seen) == _ids(data)


def test_fold_bounds():
    data = make_dataset({"cls": ["a"]}, [["a"]] * 10)
    sizes = [validation.test_cv(data, fold, 3).num_instances() for fold in range(3)]
    assert sizes == [3, 3, 4]
    with pytest.raises(ValueError):
        validation.test_cv(data, 3, 3)


def test_zero_folds_returns_whole_view(weather):
    assert validation.train_cv(weather, 0, 0) is weather
    assert validation.test_cv(weather, 0, 0) is weather


def test_stratification_groups_by_class(weather):
    play = weather.attribute("play")
    strata = validation.stratification(weather, play)
    assert [s.num_instances() for s in strata] == [9, 5]
    assert all(inst.value(play) == Value("yes") for inst in strata[0])


def test_stratified_folds_cover_every_instance_once(weather):
    play = weather.attribute("play")
    folds = validation.stratified_folds(weather, play, 5, np.random.default_rng(1))
    assert len(folds) == 5
    tested = []
    for training, testing in folds:
        assert training.num_instances() + testing.num_instances() == 14
        tested.extend(id(inst) for inst in testing)
        yes = sum(1 for inst in testing if inst.value(play) == Value("yes"))
        assert yes in (1, 2)
    assert sorted(tested) == _ids(weather)


def test_stratified_folds_need_two_folds(weather):
    with pytest.raises(ValueError):
        validation.stratified_folds(weather, weather.attribute("play"), 1)


def test_cross_validation_accuracy_in_unit_interval(weather):
    play = weather.attribute("play")
    result = validation.cross_validation(weather, play, DecisionTreeModel(), 7)
    assert 0.0 <= result.mean <= 1.0
    assert result.deviation >= 0.0


def test_stratified_cross_validation_is_reproducible(weather):
    play = weather.attribute("play")
    a = validation.stratified_cross_validation(weather, play, DecisionTreeModel(3), 4,
                                               np.random.default_rng(5))
    b = validation.stratified_cross_validation(weather, play, DecisionTreeModel(3), 4,
                                               np.random.default_rng(5))
    assert a == b
    assert 0.0 <= a.mean <= 1.0


def test_stratified_cross_validation_with_boosting(weather):
    play = weather.attribute("play")
    forest = BoostingForestModel(3, max_depth=2, rng=np.random.default_rng(2))
    result = validation.stratified_cross_validation(weather, play, forest, 3, np.random.default_rng(2))
    assert 0.0 <= result.mean <= 1.0


def test_perfectly_separable_data_scores_one():
    rows = [["a", "yes"], ["b", "no"]] * 6
    data = make_dataset({"f": ["a", "b"], "cls": ["yes", "no"]}, rows)
    result = validation.stratified_cross_validation(data, data.attribute("cls"), DecisionTreeModel(), 3,
                                                    np.random.default_rng(0))
    assert result.mean == 1.0
    assert result.deviation == 0.0


def test_cross_validation_without_any_scorable_fold_raises():
    data = make_dataset({"f": ["a"], "cls": ["yes", "no"]}, [["a", "yes"]])
    with pytest.raises(EmptyDatasetError):
        validation.stratified_cross_validation(data, data.attribute("cls"), DecisionTreeModel(), 2,
                                               np.random.default_rng(0))
