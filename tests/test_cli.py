import pytest
from typer.testing import CliRunner

from id3py import __version__
from id3py.cli import app
from conftest import WEATHER_ARFF

runner = CliRunner()


@pytest.fixture
def weather_file(tmp_path):
    path = tmp_path / "weather.arff"
    path.write_text(WEATHER_ARFF, encoding="utf-8")
    return path


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_evaluate_prints_header_and_accuracy(weather_file):
    result = runner.invoke(app, ["evaluate", str(weather_file), "--max-depth", "3", "--folds", "3",
                                 "--seed", "1"])
    assert result.exit_code == 0, result.stdout
    lines = result.stdout.splitlines()
    assert lines[0] == "Dataset: weather"
    assert lines[1] == "Number of Folds: 3"
    assert lines[2] == "MaxDepth: 3"
    assert lines[-1].startswith("Accuracy: mean=")


def test_evaluate_with_boosting(weather_file):
    result = runner.invoke(app, ["evaluate", str(weather_file), "-d", "2", "-k", "3", "-b", "3",
                                 "--seed", "4"])
    assert result.exit_code == 0, result.stdout
    assert "Boosting Iterations: 3" in result.stdout
    assert "Accuracy: mean=" in result.stdout


def test_evaluate_non_positive_depth_skips_training(weather_file):
    result = runner.invoke(app, ["evaluate", str(weather_file), "-d", "0"])
    assert result.exit_code == 0
    assert "MaxDepth: 0" in result.stdout
    assert "Accuracy" not in result.stdout


def test_tree_prints_tree_and_rules(weather_file):
    result = runner.invoke(app, ["tree", str(weather_file)])
    assert result.exit_code == 0, result.stdout
    assert result.stdout.splitlines()[0] == "outlook"
    assert "Training accuracy: 1.0000" in result.stdout

    result = runner.invoke(app, ["tree", str(weather_file), "--rules", "-d", "2"])
    assert result.exit_code == 0, result.stdout
    assert "outlook = overcast => yes" in result.stdout


def test_malformed_file_exits_with_error(tmp_path):
    path = tmp_path / "broken.arff"
    path.write_text("@relation r\n@attribute a numeric\n@data\n", encoding="utf-8")
    result = runner.invoke(app, ["evaluate", str(path), "-d", "2"])
    assert result.exit_code == 1
    # rich may wrap the long path onto several lines
    assert "line 2:" in " ".join(result.stdout.split())


def test_missing_file_is_rejected(tmp_path):
    result = runner.invoke(app, ["tree", str(tmp_path / "nope.arff")])
    assert result.exit_code != 0


def test_evaluate_rejects_fewer_than_two_folds(weather_file):
    result = runner.invoke(app, ["evaluate", str(weather_file), "-d", "3", "--folds", "1"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)


def test_evaluate_reports_when_no_fold_can_be_scored(tmp_path):
    path = tmp_path / "single.arff"
    path.write_text("@relation single\n@attribute a {x}\n@attribute cls {yes, no}\n@data\nx,yes\n",
                    encoding="utf-8")
    result = runner.invoke(app, ["evaluate", str(path), "-d", "2", "-k", "2"])
    assert result.exit_code == 1
    assert "every fold" in " ".join(result.stdout.split())
