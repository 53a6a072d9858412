"""
Fixed topology of the chained channel reaches of the 1-MK inter-farm canal
(Rudaki district).

Each reach takes the outflow of the previous reach (if any) plus the measured
flow of the channels joining at its head. The rows of the flow tables are
identified by their row number.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from icwl.data_structures import Month, SegmentFlowRow, FIRST_HALF_MONTHS

# Row numbers of Table 16
MAIN_CANAL = 1  # inter-farm canal 1-MK at PK91+50
AIO_1 = 2       # 1-1K
AIO_2 = 3       # 1-2K
AIO_3 = 4       # 1-3K
AIO_4 = 5       # 1-4K

ROW_NAMES: Dict[int, str] = {
    MAIN_CANAL: '1-MK',
    AIO_1: '1-1K',
    AIO_2: '1-2K',
    AIO_3: '1-3K',
    AIO_4: '1-4K',
}

# Only the first reach is evaluated in this month; the downstream rows are left empty
DRY_SEASON_TRANSITION_MONTH = Month.JUL


@dataclass(frozen=True)
class Segment:
    """
    Channel reach.

    number: Position in the chain (1-based)
    name: Reach name with its picket range
    length: Reach length [km]
    tributaries: Table rows whose measured flow joins at the head of the reach
    upstream: Whether the outflow of the previous reach joins at the head
    """
    number: int
    name: str
    length: float
    tributaries: Tuple[int, ...] = ()
    upstream: bool = True


SEGMENTS: Tuple[Segment, ...] = (
    Segment(1, '1-1MK PK90+50 - PK60+20', 3.030, tributaries=(MAIN_CANAL, AIO_4), upstream=False),
    Segment(2, '1-1MK PK60+20 - PK00+00', 6.020, tributaries=(AIO_2, AIO_3)),
    Segment(3, '1-1MK1 PK134+70 - PK74+40', 6.030, tributaries=(AIO_3,)),
    Segment(4, '1-1MK1 PK74+40 - PK00+00', 0.744),
)


def active_segments(month: Month, segments: Tuple[Segment, ...] = SEGMENTS) -> Tuple[Segment, ...]:
    """Reaches evaluated in a month."""
    if month is DRY_SEASON_TRANSITION_MONTH:
        return segments[:1]
    return segments


def required_rows(segments: Iterable[Segment]) -> Tuple[int, ...]:
    """Table rows whose measurements are needed to evaluate the given reaches."""
    rows = []
    for segment in segments:
        for row in segment.tributaries:
            if row not in rows:
                rows.append(row)
    return tuple(rows)


def validate_topology(segments: Tuple[Segment, ...] = SEGMENTS) -> None:
    """Raise ValueError unless the reaches form a single sequential chain."""
    if not segments:
        raise ValueError("Topology has no segments")
    if segments[0].upstream:
        raise ValueError("First segment cannot take an upstream outflow")
    for position, segment in enumerate(segments, start=1):
        if segment.number != position:
            raise ValueError(f"Segment {segment.name} is out of order")
        if position > 1 and not segment.upstream:
            raise ValueError(f"Segment {segment.number} is disconnected from the chain")
        if segment.length <= 0:
            raise ValueError(f"Segment {segment.number} has non-positive length")


def index_rows(rows: Iterable[SegmentFlowRow],
               needed: Optional[Iterable[int]] = None) -> Dict[int, SegmentFlowRow]:
    """Index flow rows by row number, checking that the needed rows are present."""
    if needed is None:
        needed = required_rows(SEGMENTS)
    indexed = {row.number: row for row in rows}
    missing = [number for number in needed if number not in indexed]
    if missing:
        names = ', '.join(ROW_NAMES.get(n, str(n)) for n in missing)
        raise ValueError(f"Flow table is missing rows: {names}")
    return indexed


def table_for_month(month: Month, part1: Dict[int, SegmentFlowRow],
                    part2: Dict[int, SegmentFlowRow]) -> Dict[int, SegmentFlowRow]:
    """April-June come from the first half of the table, July-October from the second."""
    return part1 if month in FIRST_HALF_MONTHS else part2


def decade_inflows(rows: Dict[int, SegmentFlowRow], month: Month, index: int,
                   needed: Iterable[int]) -> Dict[int, Optional[float]]:
    return {number: rows[number].flow(month, index) for number in needed}
