import numpy as np
import pytest

from id3py import Dataset, EnumAttribute, arff

WEATHER_ARFF = """\
@relation weather

@attribute outlook {sunny, overcast, rainy}
@attribute temperature {hot, mild, cool}
@attribute humidity {high, normal}
@attribute windy {true, false}
@attribute play {yes, no}

@data
sunny,hot,high,false,no
sunny,hot,high,true,no
overcast,hot,high,false,yes
rainy,mild,high,false,yes
rainy,cool,normal,false,yes
rainy,cool,normal,true,no
overcast,cool,normal,true,yes
sunny,mild,high,false,no
sunny,cool,normal,false,yes
rainy,mild,normal,false,yes
sunny,mild,normal,true,yes
overcast,mild,high,true,yes
overcast,hot,normal,false,yes
rainy,mild,high,true,no
"""


class FixedDraws:
    """Stands in for a numpy Generator: ``random(n)`` returns evenly spaced draws."""

    def random(self, n):
        return np.array([(i + 0.5) / n for i in range(n)])


@pytest.fixture
def weather():
    return arff.loads(WEATHER_ARFF)


def make_dataset(columns, rows, name="toy"):
    """Build a dataset from ``{"name": [domain...]}`` and value rows."""
    dataset = Dataset(*(EnumAttribute(n, d) for n, d in columns.items()), name=name)
    for row in rows:
        dataset.add_row(row)
    return dataset
