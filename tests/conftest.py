import os
import sys
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from icwl.official_data import table16_part1, table16_part2
from icwl.hydrology import calculate_hydrology_table
from icwl.data_structures import Channel

@pytest.fixture
def part1():
    return table16_part1()

@pytest.fixture
def part2():
    return table16_part2()

@pytest.fixture
def results(part1, part2):
    return calculate_hydrology_table(part1, part2)

@pytest.fixture
def channel():
    return Channel(
        name='1-1MK PK90+50 - PK60+20',
        length=5.0,
        width=4.5,
        depth=1.8,
        water_volume_in=10.0,
        water_volume_out=7.0,
    )
