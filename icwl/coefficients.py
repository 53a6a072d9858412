"""
Adjustment coefficients for the seepage-loss estimate.

Each categorical channel attribute maps to a multiplicative coefficient.
Unknown or missing values map to 1.0 so that an unrecognised category never
changes (or zeroes) a physical quantity.
"""
from datetime import date, datetime
from typing import Dict, Optional, Union

import pandas as pd

NEUTRAL = 1.0

CONDITION_COEFFICIENTS: Dict[str, float] = {
    'excellent': 0.9,
    'good': 1.0,
    'satisfactory': 1.2,
    'poor': 1.4,
    'critical': 1.6,
}

VEGETATION_COEFFICIENTS: Dict[str, float] = {
    'none': 1.0,
    'minimal': 1.03,
    'moderate': 1.08,
    'high': 1.12,
    'critical': 1.15,
}

SOIL_TYPE_COEFFICIENTS: Dict[str, float] = {
    'sandy': 1.5,   # high filtration
    'loam': 1.0,
    'clay': 0.7,    # low filtration
    'mixed': 1.0,
}

# Seasonal factors for Tajikistan
SEASON_COEFFICIENTS: Dict[str, float] = {
    'spring': 1.1,  # snowmelt
    'summer': 1.2,  # peak evaporation
    'autumn': 1.0,
    'winter': 0.8,
}

# Channel lining
COVERAGE_COEFFICIENTS: Dict[str, float] = {
    'earth': 1.5,
    'clay': 1.2,
    'stone': 1.1,
    'brick': 1.0,
    'mixed': 1.3,
    'asphalt': 0.9,
    'concrete': 0.7,
    'plastic': 0.6,
    'polyethylene': 0.5,
    'geomembrane': 0.4,
    'composite': 0.6,
    'rubber': 0.5,
}

COEFFICIENT_TABLES: Dict[str, Dict[str, float]] = {
    'condition': CONDITION_COEFFICIENTS,
    'vegetation': VEGETATION_COEFFICIENTS,
    'soil_type': SOIL_TYPE_COEFFICIENTS,
    'season': SEASON_COEFFICIENTS,
    'coverage': COVERAGE_COEFFICIENTS,
}


def normalize_category(value: Optional[str]) -> Optional[str]:
    """Canonical form of a categorical value (trimmed, lower case)."""
    if value is None:
        return None
    return str(value).strip().lower()


def coefficient(category: str, value: Optional[str]) -> float:
    """
    Look up the coefficient of a categorical attribute.

    Args:
        category: One of condition, vegetation, soil_type, season, coverage
        value: Attribute value, may be None

    Returns:
        float: Table coefficient, 1.0 for unknown categories or values
    """
    if value is None:
        return NEUTRAL
    table = COEFFICIENT_TABLES.get(category)
    if table is None:
        return NEUTRAL
    return table.get(normalize_category(value), NEUTRAL)


def groundwater_coefficient(depth: Optional[float]) -> float:
    """
    Coefficient of the groundwater depth [m].

    A shallow water table (< 2 m) reduces filtration, a deep one (>= 5 m)
    increases it. Unknown depth is neutral.
    """
    if depth is None or pd.isna(depth) or depth == 0:
        return NEUTRAL
    if depth < 2:
        return 0.8
    if depth < 5:
        return 1.0
    return 1.2


def season_from_date(value: Union[str, date, datetime]) -> str:
    """Season of a measurement date: Mar-May spring, Jun-Aug summer, Sep-Nov autumn."""
    month = pd.Timestamp(value).month
    if 3 <= month <= 5:
        return 'spring'
    if 6 <= month <= 8:
        return 'summer'
    if 9 <= month <= 11:
        return 'autumn'
    return 'winter'
