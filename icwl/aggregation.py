"""
Decade volumes and their accumulation over months and the season.

    Wg = 86.4 × t × Qg / 10⁶      [million m³]
    Wtotal = Wg + Wreturn

86.4 converts L/s sustained for a day into m³ (86400 s / 1000 L), and the
10⁶ divisor gives million m³. An unset intake flow gives unset volumes.
"""
from typing import Dict, Optional

import numpy as np
import pandas as pd

from icwl.data_structures import CalculatedTableResults, Month, SEASON_MONTHS, parse_decade_key

VOLUME_FACTOR = 86.4
DAYS_IN_DECADE = 10
RETURN_VOLUME = 0.0


def decade_volume(q_g: Optional[float], days: float = DAYS_IN_DECADE) -> Optional[float]:
    """Intake volume of a decade [million m³] from the intake flow [L/s]."""
    if q_g is None:
        return None
    return VOLUME_FACTOR * days * q_g / 1e6


def total_volume(w_g: Optional[float], w_return: float = RETURN_VOLUME) -> Optional[float]:
    """Intake volume plus return-flow volume [million m³]."""
    if w_g is None:
        return None
    return w_g + w_return


def _sum_or_none(values) -> Optional[float]:
    present = [v for v in values if v is not None]
    if not present:
        return None
    return float(np.sum(present))


def monthly_totals(results: CalculatedTableResults) -> pd.DataFrame:
    """
    Sum of the decade volumes of each month.

    Returns:
        pd.DataFrame: Indexed by month with columns w_g and w_total [million m³]
            and decades (number of decades with a computed volume). Months
            without any computed decade keep NaN totals.
    """
    by_month: Dict[Month, Dict[str, list]] = {m: {'w_g': [], 'w_total': []} for m in SEASON_MONTHS}
    for key, result in results.items():
        month, _ = parse_decade_key(key)
        by_month[month]['w_g'].append(result.w_g)
        by_month[month]['w_total'].append(result.w_total)

    rows = []
    for month, values in by_month.items():
        rows.append({
            'month': month.value,
            'w_g': _sum_or_none(values['w_g']),
            'w_total': _sum_or_none(values['w_total']),
            'decades': sum(v is not None for v in values['w_g']),
        })
    return pd.DataFrame(rows).set_index('month').astype({'w_g': float, 'w_total': float})


def season_total(results: CalculatedTableResults) -> Optional[float]:
    """Total intake volume over the season [million m³], None if nothing was computed."""
    return _sum_or_none(result.w_total for result in results.values())


def cumulative_volume(results: CalculatedTableResults) -> Dict[str, Optional[float]]:
    """
    Running total of Wtotal over decades in season order.

    Unset decades keep an unset entry and do not contribute to the total.
    """
    running = 0.0
    cumulative: Dict[str, Optional[float]] = {}
    for key, result in results.items():
        if result.w_total is None:
            cumulative[key] = None
            continue
        running += result.w_total
        cumulative[key] = running
    return cumulative
