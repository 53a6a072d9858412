"""
Input of the external AI analysis client.

The client receives, for each table row, the computed values of the season
in decade order. Unset decades are left out; nothing is interpolated.
"""
from typing import Dict, List

from icwl.data_structures import CalculatedTableResults


def collect_analysis_data(results: CalculatedTableResults) -> Dict[str, List[float]]:
    data: Dict[str, List[float]] = {}
    for result in results.values():
        for row, value in result.rows().items():
            values = data.setdefault(row, [])
            if value is not None:
                values.append(value)
    return data
