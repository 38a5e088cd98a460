import pytest

from id3py import RangeView, Value, arff
from id3py.arff import ArffParseError
from conftest import WEATHER_ARFF


def test_loads_weather(weather):
    assert weather.name == "weather"
    assert [a.name for a in weather.attributes()] == ["outlook", "temperature", "humidity", "windy", "play"]
    assert weather.num_instances() == 14
    assert [v.value for v in weather.attribute("outlook")] == ["sunny", "overcast", "rainy"]
    first = weather.instance_at(0)
    assert first.value(weather.attribute("play")) == Value("no")
    assert first.weight == 1.0


def test_dumps_reproduces_the_table(weather):
    text = arff.dumps(weather)
    assert text.startswith("@relation weather\n\n@attribute outlook {sunny, overcast, rainy}\n")
    assert "\n\n@data\nsunny,hot,high,false,no\n" in text
    assert text.endswith("rainy,mild,high,true,no\n")
    again = arff.loads(text)
    assert arff.dumps(again) == text


def test_dumps_a_view_writes_only_its_instances(weather):
    text = arff.dumps(RangeView(weather, 2, 4))
    assert text.split("@data\n")[1] == "overcast,hot,high,false,yes\nrainy,mild,high,false,yes\n"
    assert weather.to_arff() == arff.dumps(weather)


def test_comments_blank_lines_and_case_are_tolerated():
    text = """\
% the classic
@RELATION tiny

@Attribute colour { red , green }
@ATTRIBUTE ok {y, n}
% rows follow
@DATA
red, y

green,n
"""
    data = arff.loads(text)
    assert data.name == "tiny"
    assert [v.value for v in data.attribute("colour")] == ["red", "green"]
    assert data.num_instances() == 2
    assert data.instance_at(0).value(data.attribute("ok")) == Value("y")


@pytest.mark.parametrize(
    "text,line_number",
    [
        ("@relation r\n@attribute a numeric\n@data\n", 2),
        ("@relation r\n@attribute {x, y}\n@data\n", 2),
        ("@relation r\n@attribute a {x, , y}\n@data\n", 2),
        ("@relation r\n@attribute a {x, x}\n@data\n", 2),
        ("@relation r\n@attribute a {x}\n@attribute a {y}\n@data\n", 3),
        ("@relation r\n@attribute a {x}\n@bogus\n@data\n", 3),
        ("@relation r\nx\n@attribute a {x}\n@data\n", 2),
        ("@relation r\n@attribute a {x}\n@attribute b {y}\n@data\nx\n", 5),
        ("@relation r\n@attribute a {x}\n\n@data\nx\nz\n", 6),
        ("@relation\n@attribute a {x}\n@data\n", 1),
    ],
)
def test_parse_errors_report_line(text, line_number):
    with pytest.raises(ArffParseError) as info:
        arff.loads(text)
    assert info.value.line_number == line_number
    assert f"line {line_number}:" in str(info.value)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        arff.loads("@relation r\n@attribute a {x}\n@data\ny\n")


def test_file_round_trip(weather, tmp_path):
    path = tmp_path / "weather.arff"
    arff.dump(weather, path)
    assert path.read_text(encoding="utf-8") == arff.dumps(weather)
    loaded = arff.load(path)
    assert loaded.num_instances() == 14
    assert str(loaded) == str(arff.loads(WEATHER_ARFF))
