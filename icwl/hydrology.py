"""
Hydrology table of the chained channel reaches.

For every decade of the season the inflow is propagated down the reaches of
icwl.topology:

    Qin(1) = Q(1-MK) + Q(1-4K)
    Qin(n) = Qout(n-1) + Σ Q(tributaries of n)
    S(n)   = 10 × A × L(n) × √(Qin(n) / 1000)
    Qout(n) = Qin(n) + S(n)

and the intake rows follow from the last reach: Qg = Qout(4), Wg and Wtotal
(icwl.aggregation). Every decade is computed independently from the measured
flows of the same decade.

A decade whose required measurements are incomplete is left entirely unset.
In July only the first reach is evaluated.
"""
from typing import Dict, Iterable, List, Optional, Tuple
import logging

import pandas as pd
from joblib import Parallel, delayed
from tqdm.auto import tqdm

from icwl.aggregation import DAYS_IN_DECADE, RETURN_VOLUME, decade_volume, total_volume
from icwl.data_structures import (
    CalculatedTableResults, DecadeResult, LossResult, Month, SegmentFlowRow,
    SEASON_MONTHS, DECADE_LABELS, decade_key, iter_decades
)
from icwl.formulas import AVERAGE_A, base_loss
from icwl.topology import (
    SEGMENTS, MAIN_CANAL, AIO_4, Segment, active_segments, decade_inflows,
    index_rows, required_rows, table_for_month, validate_topology
)

logger = logging.getLogger(__name__)


def propagate_chain(inflows: Dict[int, Optional[float]], segments: Tuple[Segment, ...],
                    a: float = AVERAGE_A) -> Optional[List[LossResult]]:
    """
    Propagate one decade through the given reaches in order.

    Args:
        inflows: Measured flow of each table row [L/s], None when unmeasured
        segments: Reaches to evaluate, in chain order
        a: Filtration coefficient

    Returns:
        List[LossResult]: One result per reach, or None if any required
            measurement is missing
    """
    needed = required_rows(segments)
    if any(inflows.get(row) is None for row in needed):
        return None

    results: List[LossResult] = []
    previous_out: Optional[float] = None
    for segment in segments:
        q_in = sum(inflows[row] for row in segment.tributaries)
        if segment.upstream:
            q_in += previous_out
        s = base_loss(q_in, segment.length, a)
        q_out = q_in + s
        results.append(LossResult(q_in=q_in, s=s, q_out=q_out))
        previous_out = q_out
    return results


def calculate_decade(month: Month, index: int, part1: Dict[int, SegmentFlowRow],
                     part2: Dict[int, SegmentFlowRow], a: float = AVERAGE_A,
                     days: float = DAYS_IN_DECADE, return_volume: float = RETURN_VOLUME,
                     segments: Tuple[Segment, ...] = SEGMENTS) -> DecadeResult:
    """Evaluate the reaches and intake rows of a single decade."""
    evaluated = active_segments(month, segments)
    rows = table_for_month(month, part1, part2)
    inflows = decade_inflows(rows, month, index, required_rows(evaluated))

    chain = propagate_chain(inflows, evaluated, a)
    if chain is None:
        logger.debug("Skipping %s: incomplete measurements", decade_key(month, index))
        return DecadeResult.empty(len(segments))

    padded = chain + [LossResult.empty() for _ in range(len(segments) - len(chain))]
    q_g = padded[-1].q_out
    w_g = decade_volume(q_g, days)
    return DecadeResult(
        segments=tuple(padded),
        q_g=q_g,
        w_g=w_g,
        w_total=total_volume(w_g, return_volume),
    )


def calculate_hydrology_table(part1_rows: Iterable[SegmentFlowRow], part2_rows: Iterable[SegmentFlowRow],
                              a: float = AVERAGE_A, days: float = DAYS_IN_DECADE,
                              return_volume: float = RETURN_VOLUME, n_jobs: int = 1,
                              progress: bool = False) -> CalculatedTableResults:
    """
    Compute the hydrology table for every decade of the season.

    Args:
        part1_rows: Flow table for April-June
        part2_rows: Flow table for July-October
        a: Filtration coefficient
        days: Days per decade
        return_volume: Return-flow volume added to each decade [million m³]
        n_jobs: Parallel jobs over decades (joblib semantics, 1 runs serially)
        progress: Show a progress bar

    Returns:
        CalculatedTableResults: Results for all decades in season order
    """
    validate_topology(SEGMENTS)
    part1 = index_rows(part1_rows)
    part2 = index_rows(part2_rows)
    decades = list(iter_decades(SEASON_MONTHS))

    if n_jobs == 1:
        computed = [calculate_decade(month, idx, part1, part2, a, days, return_volume)
                    for month, idx in tqdm(decades, desc="Decades", disable=not progress)]
    else:
        computed = Parallel(n_jobs=n_jobs, backend='loky', verbose=0)(
            delayed(calculate_decade)(month, idx, part1, part2, a, days, return_volume)
            for month, idx in decades
        )

    results = CalculatedTableResults({
        decade_key(month, idx): result for (month, idx), result in zip(decades, computed)
    })
    computed_count = sum(not r.is_empty for r in results.values())
    logger.info("Computed %d of %d decades", computed_count, len(results))
    return results


def segment1_series(part1_rows: Iterable[SegmentFlowRow], part2_rows: Iterable[SegmentFlowRow],
                    a: float = AVERAGE_A) -> pd.DataFrame:
    """
    Measured inflow of the first reach for every decade.

    Qx = Q(1-MK) + Q(1-4K) (NaN if either is unmeasured), S only where Qx > 0
    and Qfx = Qx + S where both are known.
    """
    first = SEGMENTS[0]
    needed = (MAIN_CANAL, AIO_4)
    part1 = index_rows(part1_rows, needed)
    part2 = index_rows(part2_rows, needed)

    records = []
    for month, idx in iter_decades(SEASON_MONTHS):
        rows = table_for_month(month, part1, part2)
        flows = decade_inflows(rows, month, idx, needed)
        qx = None if any(v is None for v in flows.values()) else sum(flows.values())
        s = base_loss(qx, first.length, a) if qx is not None and qx > 0 else None
        qfx = qx + s if qx is not None and s is not None else None
        records.append({'month': month.value, 'decade': DECADE_LABELS[idx],
                        'q_x': qx, 's': s, 'q_fx': qfx})
    return pd.DataFrame.from_records(records).set_index(['month', 'decade']).astype(float)
