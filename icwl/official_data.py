"""
Table 16. Discharge of the inter-farm canals at PK 0, the water user
associations (AIO) and the main canals of Rudaki district [L/s].

The table is published in two halves: April-June (with the Ω column) and
July-October. October has two measured decades.
"""
from typing import Dict, List, Optional, Tuple

from icwl.data_structures import Month, SegmentFlowRow

_Series = Dict[Month, Tuple[Optional[float], ...]]

_ROWS: List[Tuple[int, str, float, float, _Series]] = [
    (1, 'Inter-farm canal 1-MK at PK91+50', 18155, 1061.3, {
        Month.APR: (1061.3, 2028.5, 4788.9),
        Month.MAY: (7823.8, 14670.0, 16878.8),
        Month.JUN: (17699.6, 20047.0, 9583.1),
        Month.JUL: (9737.3, 9170.0, 9002.7),
        Month.AUG: (7251.3, 6425.3, 5097.4),
        Month.SEP: (5215.0, 4723.6, 3931.5),
        Month.OCT: (3586.5, 2316.0),
    }),
    (2, '1-1K, AIO-1', 1663, 97.2, {
        Month.APR: (97.2, 185.8, 438.7),
        Month.MAY: (716.7, 1343.8, 1546.1),
        Month.JUN: (1621.3, 1836.3, 877.8),
        Month.JUL: (891.9, 840.0, 824.7),
        Month.AUG: (664.2, 588.6, 466.9),
        Month.SEP: (477.7, 432.7, 360.1),
        Month.OCT: (328.5, 212.1),
    }),
    (3, '1-2K, AIO-2', 2650, 154.9, {
        Month.APR: (154.9, 296.1, 699.0),
        Month.MAY: (1142.0, 2141.3, 2463.7),
        Month.JUN: (2583.5, 2926.2, 1398.8),
        Month.JUL: (1421.3, 1338.5, 1314.1),
        Month.AUG: (1058.4, 937.9, 744.0),
        Month.SEP: (761.2, 689.5, 573.9),
        Month.OCT: (523.5, 338.1),
    }),
    (4, '1-3K, AIO-3', 985, 57.6, {
        Month.APR: (57.6, 110.1, 259.8),
        Month.MAY: (424.5, 795.9, 915.8),
        Month.JUN: (960.3, 1087.7, 519.9),
        Month.JUL: (528.3, 497.5, 488.4),
        Month.AUG: (393.4, 348.6, 276.6),
        Month.SEP: (282.9, 256.3, 213.3),
        Month.OCT: (194.6, 125.7),
    }),
    (5, '1-4K, AIO-4', 694, 40.6, {
        Month.APR: (40.6, 77.5, 183.1),
        Month.MAY: (299.1, 560.8, 645.2),
        Month.JUN: (676.6, 766.3, 366.3),
        Month.JUL: (372.2, 350.5, 344.1),
        Month.AUG: (277.2, 245.6, 194.9),
        Month.SEP: (199.4, 180.6, 150.3),
        Month.OCT: (137.1, 88.5),
    }),
]


def table16_part1() -> List[SegmentFlowRow]:
    """First half of Table 16 (April-June, with Ω)."""
    return [SegmentFlowRow(number=number, name=name, area=area, omega=omega, decades=dict(series))
            for number, name, area, omega, series in _ROWS]


def table16_part2() -> List[SegmentFlowRow]:
    """Second half of Table 16 (July-October)."""
    return [SegmentFlowRow(number=number, name=name, area=area, decades=dict(series))
            for number, name, area, _, series in _ROWS]
