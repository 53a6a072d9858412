"""
Data structures for the channel water-loss model.

Key components:
    - Month: the irrigation-season months (April to October).
    - SegmentFlowRow: a measured inflow series of one named channel, by decade.
    - LossResult: inflow, seepage loss and outflow of one segment in one decade.
    - DecadeResult: the chained segment results and volume rows of one decade.
    - CalculatedTableResults: the complete snapshot over the season.
    - Channel: a stored channel record consumed by the channel metrics.

A missing measurement is always ``None`` (``NaN`` once exported to pandas),
never zero.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

DECADE_LABELS = ('i', 'ii', 'iii')


class Month(Enum):
    """Irrigation-season months in calendar order."""
    APR = 'apr'
    MAY = 'may'
    JUN = 'jun'
    JUL = 'jul'
    AUG = 'aug'
    SEP = 'sep'
    OCT = 'oct'


SEASON_MONTHS: Tuple[Month, ...] = tuple(Month)
FIRST_HALF_MONTHS: Tuple[Month, ...] = (Month.APR, Month.MAY, Month.JUN)


def decade_count(month: Month) -> int:
    """October is measured in two decades only; every other month in three."""
    return 2 if month is Month.OCT else 3


def decade_key(month: Month, index: int) -> str:
    if not 0 <= index < decade_count(month):
        raise ValueError(f"Decade index {index} out of range for {month.value}")
    return f"{month.value}_{DECADE_LABELS[index]}"


def parse_decade_key(key: str) -> Tuple[Month, int]:
    month, label = key.split('_', 1)
    return Month(month), DECADE_LABELS.index(label)


def iter_decades(months: Sequence[Month] = SEASON_MONTHS) -> Iterator[Tuple[Month, int]]:
    """Yield (month, decade index) pairs in season order."""
    for month in months:
        for index in range(decade_count(month)):
            yield month, index


@dataclass
class SegmentFlowRow:
    """
    Measured inflow series of a named channel or distributary.

    Args:
        number: Row number in the source table (identifies the channel)
        name: Channel name
        area: Irrigated area [ha]
        decades: Flow per month, one value per decade [L/s], None when unmeasured
        omega: Ω column of the first half of the table
    """
    number: int
    name: str
    area: float
    decades: Dict[Month, Tuple[Optional[float], ...]] = field(default_factory=dict)
    omega: Optional[float] = None

    def flow(self, month: Month, index: int) -> Optional[float]:
        values = self.decades.get(month)
        if values is None or index >= len(values):
            return None
        value = values[index]
        if value is None or (isinstance(value, float) and np.isnan(value)):
            return None
        return float(value)


@dataclass(frozen=True)
class LossResult:
    """Segment result for one decade. Either all three values are set or none."""
    q_in: Optional[float] = None
    s: Optional[float] = None
    q_out: Optional[float] = None

    @classmethod
    def empty(cls) -> 'LossResult':
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.q_in is None and self.s is None and self.q_out is None


@dataclass(frozen=True)
class DecadeResult:
    """
    Results of one decade: the four chained segments plus the intake rows.

    q_g: Total intake flow [L/s]
    w_g: Intake volume over the decade [million m³]
    w_total: Intake volume including return flow [million m³]
    """
    segments: Tuple[LossResult, ...]
    q_g: Optional[float] = None
    w_g: Optional[float] = None
    w_total: Optional[float] = None

    @classmethod
    def empty(cls, n_segments: int) -> 'DecadeResult':
        return cls(segments=tuple(LossResult.empty() for _ in range(n_segments)))

    @property
    def is_empty(self) -> bool:
        return (all(seg.is_empty for seg in self.segments)
                and self.q_g is None and self.w_g is None and self.w_total is None)

    def rows(self) -> Dict[str, Optional[float]]:
        """Flatten into named rows, e.g. segment_1_q_in ... w_total."""
        flat: Dict[str, Optional[float]] = {}
        for number, seg in enumerate(self.segments, start=1):
            flat[f'segment_{number}_q_in'] = seg.q_in
            flat[f'segment_{number}_s'] = seg.s
            flat[f'segment_{number}_q_out'] = seg.q_out
        flat['q_g'] = self.q_g
        flat['w_g'] = self.w_g
        flat['w_total'] = self.w_total
        return flat


class CalculatedTableResults(Mapping[str, DecadeResult]):
    """
    Read-only mapping of decade key ("aug_i", "oct_ii", ...) to DecadeResult,
    ordered by season.
    """

    def __init__(self, decades: Mapping[str, DecadeResult]):
        self._decades: Dict[str, DecadeResult] = dict(decades)

    def __getitem__(self, key: str) -> DecadeResult:
        return self._decades[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._decades)

    def __len__(self) -> int:
        return len(self._decades)

    def __repr__(self) -> str:
        return f"CalculatedTableResults({len(self)} decades)"

    def to_dataframe(self) -> pd.DataFrame:
        """One row per decade, NaN where a value is unset."""
        if not self._decades:
            return pd.DataFrame()
        records: List[Dict[str, Optional[float]]] = []
        index: List[Tuple[str, str]] = []
        for key, result in self._decades.items():
            month, idx = parse_decade_key(key)
            index.append((month.value, DECADE_LABELS[idx]))
            records.append(result.rows())
        df = pd.DataFrame.from_records(records)
        df.index = pd.MultiIndex.from_tuples(index, names=['month', 'decade'])
        return df.astype(float)


@dataclass
class Channel:
    """
    Stored channel record.

    Physical attributes: length [km], width [m], depth [m].
    Flows: water_flow, water_volume_in, water_volume_out [m³/s].
    Categorical factors are optional; derived fields are filled by
    icwl.channel_metrics.update_channel.
    """
    name: str
    length: float = 0.0
    width: float = 0.0
    depth: float = 0.0
    water_flow: float = 0.0
    water_volume_in: float = 0.0
    water_volume_out: float = 0.0
    filtration_coefficient: float = 2.08
    coverage: Optional[str] = None
    condition: Optional[str] = None
    vegetation: Optional[str] = None
    soil_type: Optional[str] = None
    season: Optional[str] = None
    groundwater_depth: Optional[float] = None
    slope: Optional[float] = None
    measurement_date: Optional[str] = None
    id: Optional[str] = None

    # Derived
    loss_volume: float = 0.0
    loss_percentage: float = 0.0
    loss_per_km: float = 0.0
    efficiency: float = 1.0
    status: str = 'normal'

    def with_metrics(self, metrics: 'ChannelMetrics') -> 'Channel':
        return replace(self,
                       loss_volume=metrics.loss_volume,
                       loss_percentage=metrics.loss_percentage,
                       loss_per_km=metrics.loss_per_km,
                       efficiency=metrics.efficiency,
                       status=metrics.status)


@dataclass(frozen=True)
class ChannelMetrics:
    """Derived metrics of a channel record"""
    loss_volume: float
    loss_percentage: float
    loss_per_km: float
    efficiency: float
    status: str
