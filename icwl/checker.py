"""
Consistency checks of computed results and channel records.

- Reach balance: Qout = Qin + S
- Non-negative seepage
- Complete or empty triples (no partially computed reach)
- Empty downstream rows in the dry-season transition month
- Number of decades per month
- Channel records whose outflow exceeds the inflow
"""
from typing import Dict, List
import logging

import pandas as pd

from icwl.data_structures import CalculatedTableResults, SEASON_MONTHS, decade_count, parse_decade_key
from icwl.topology import DRY_SEASON_TRANSITION_MONTH

logger = logging.getLogger(__name__)

ZERO_THRESHOLD = 1e-9

ISSUE_COLUMNS = ['decade', 'row', 'issue_type', 'description']


def _issue(decade: str, row: str, issue_type: str, description: str) -> Dict[str, str]:
    return {'decade': decade, 'row': row, 'issue_type': issue_type, 'description': description}


def check_results(results: CalculatedTableResults) -> pd.DataFrame:
    """Return one row per issue found in the results (empty when consistent)."""
    issues: List[Dict[str, str]] = []
    per_month = {month: 0 for month in SEASON_MONTHS}

    for key, result in results.items():
        month, _ = parse_decade_key(key)
        per_month[month] += 1

        for number, seg in enumerate(result.segments, start=1):
            row = f'segment_{number}'
            values = (seg.q_in, seg.s, seg.q_out)
            if any(v is None for v in values):
                if not seg.is_empty:
                    issues.append(_issue(key, row, 'partial', 'Partially computed reach'))
                continue
            if seg.s < 0:
                issues.append(_issue(key, row, 'negative_loss', f'S = {seg.s:.3f}'))
            if abs(seg.q_out - seg.q_in - seg.s) > ZERO_THRESHOLD:
                issues.append(_issue(key, row, 'balance',
                                     f'Qout {seg.q_out:.3f} != Qin {seg.q_in:.3f} + S {seg.s:.3f}'))

        last = result.segments[-1] if result.segments else None
        if last is not None and result.q_g != last.q_out:
            issues.append(_issue(key, 'q_g', 'intake', 'Qg differs from the outflow of the last reach'))
        if result.q_g is None and (result.w_g is not None or result.w_total is not None):
            issues.append(_issue(key, 'w_g', 'partial', 'Volume set without intake flow'))

        if month is DRY_SEASON_TRANSITION_MONTH:
            downstream = result.segments[1:]
            if any(not seg.is_empty for seg in downstream) or result.q_g is not None:
                issues.append(_issue(key, 'segments', 'transition_month',
                                     f'Downstream rows set in {month.value}'))

    for month, count in per_month.items():
        if count and count != decade_count(month):
            issues.append(_issue(month.value, '-', 'decade_count',
                                 f'{count} decades, expected {decade_count(month)}'))

    return pd.DataFrame(issues, columns=ISSUE_COLUMNS)


def check_channels(channels: pd.DataFrame) -> pd.DataFrame:
    """Flag channel records with negative loss or without length."""
    issues: List[Dict[str, str]] = []
    for _, channel in channels.iterrows():
        name = str(channel.get('name', '-'))
        flow_in = channel.get('water_volume_in', 0.0)
        flow_out = channel.get('water_volume_out', 0.0)
        if pd.notna(flow_in) and pd.notna(flow_out) and flow_out > flow_in:
            issues.append(_issue('-', name, 'negative_loss',
                                 f'Outflow {flow_out} exceeds inflow {flow_in}'))
        length = channel.get('length', 0.0)
        if pd.isna(length) or length <= 0:
            issues.append(_issue('-', name, 'length', 'Channel length is not positive'))
    return pd.DataFrame(issues, columns=ISSUE_COLUMNS)


def alert(issues: pd.DataFrame) -> None:
    """Log a warning per issue type."""
    if issues is None or issues.empty:
        logger.info("No consistency issues found")
        return

    for issue_type in issues['issue_type'].unique():
        selected = issues[issues['issue_type'] == issue_type]
        logger.warning("%d %s issues (first: %s %s)", len(selected), issue_type,
                       selected['decade'].iloc[0], selected['row'].iloc[0])
