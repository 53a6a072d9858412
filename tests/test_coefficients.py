import pytest

from icwl.coefficients import (
    COVERAGE_COEFFICIENTS, coefficient, groundwater_coefficient, season_from_date
)


@pytest.mark.parametrize("category,value,expected", [
    ('condition', 'excellent', 0.9),
    ('condition', 'critical', 1.6),
    ('vegetation', 'high', 1.12),
    ('soil_type', 'sandy', 1.5),
    ('soil_type', 'clay', 0.7),
    ('season', 'winter', 0.8),
    ('coverage', 'geomembrane', 0.4),
    ('coverage', 'earth', 1.5),
])
def test_table_values(category, value, expected):
    assert coefficient(category, value) == expected


def test_unknown_values_are_neutral():
    assert coefficient('condition', 'ruined') == 1.0
    assert coefficient('condition', None) == 1.0
    assert coefficient('lining', 'earth') == 1.0


def test_lookup_ignores_case():
    assert coefficient('vegetation', ' Moderate ') == 1.08


def test_coverage_table_range():
    assert len(COVERAGE_COEFFICIENTS) == 12
    assert min(COVERAGE_COEFFICIENTS.values()) == 0.4
    assert max(COVERAGE_COEFFICIENTS.values()) == 1.5


@pytest.mark.parametrize("depth,expected", [
    (None, 1.0),
    (1.5, 0.8),
    (2.0, 1.0),
    (4.99, 1.0),
    (5.0, 1.2),
    (12.0, 1.2),
])
def test_groundwater_bands(depth, expected):
    assert groundwater_coefficient(depth) == expected


@pytest.mark.parametrize("date,season", [
    ('2024-03-01', 'spring'),
    ('2024-05-31', 'spring'),
    ('2024-07-12', 'summer'),
    ('2024-11-30', 'autumn'),
    ('2024-12-15', 'winter'),
    ('2025-02-01', 'winter'),
])
def test_season_from_date(date, season):
    assert season_from_date(date) == season
