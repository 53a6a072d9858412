import os
from typing import Dict, List, Optional, Tuple
import logging

import pandas as pd
import numpy as np
from dynaconf import Dynaconf

from icwl.data_structures import (
    Month, SegmentFlowRow, DECADE_LABELS, decade_count, parse_decade_key
)
from icwl.official_data import table16_part1, table16_part2

logger = logging.getLogger(__name__)

ID_COLUMNS = ['number', 'name']

def _decade_columns(columns: List[str]) -> Dict[str, Tuple[Month, int]]:
    """Map decade columns (e.g. 'apr_i', 'oct_ii') to (month, index)."""
    decade_columns = {}
    for column in columns:
        if column in ID_COLUMNS or column in ('area', 'omega'):
            continue
        try:
            month, index = parse_decade_key(column)
        except ValueError as exc:
            raise ValueError(f"Unrecognised flow table column: {column}") from exc
        if index >= decade_count(month):
            raise ValueError(f"{month.value} has only {decade_count(month)} decades: {column}")
        decade_columns[column] = (month, index)
    return decade_columns

def flow_rows_from_frame(table: pd.DataFrame) -> List[SegmentFlowRow]:
    """
    Convert a wide flow table into SegmentFlowRow objects.

    Args:
        table (pd.DataFrame): One row per channel with columns number, name,
            optional area and omega, and one column per decade named
            '{month}_{i|ii|iii}' [L/s]. Empty cells are unmeasured decades.

    Returns:
        List[SegmentFlowRow]: Flow rows in table order
    """
    missing = [c for c in ID_COLUMNS if c not in table.columns]
    if missing:
        raise ValueError(f"Flow table is missing columns: {', '.join(missing)}")

    decade_columns = _decade_columns(list(table.columns))
    try:
        flows = table[list(decade_columns)].apply(pd.to_numeric, errors='raise')
    except (ValueError, TypeError) as exc:
        raise ValueError(f"Flow table contains non-numeric flows: {exc}") from exc

    rows = []
    for i, record in table.iterrows():
        decades: Dict[Month, List[Optional[float]]] = {}
        for column, (month, index) in decade_columns.items():
            series = decades.setdefault(month, [None] * decade_count(month))
            value = flows.loc[i, column]
            series[index] = None if np.isnan(value) else float(value)

        omega = record.get('omega')
        area = record.get('area')
        rows.append(SegmentFlowRow(
            number=int(record['number']),
            name=str(record['name']),
            area=0.0 if area is None or pd.isna(area) else float(area),
            omega=None if omega is None or pd.isna(omega) else float(omega),
            decades={month: tuple(values) for month, values in decades.items()},
        ))
    return rows

def flow_rows_to_frame(rows: List[SegmentFlowRow]) -> pd.DataFrame:
    """Inverse of flow_rows_from_frame."""
    records = []
    for row in rows:
        record = {'number': row.number, 'name': row.name, 'area': row.area, 'omega': row.omega}
        for month in Month:
            for index in range(decade_count(month)):
                record[f"{month.value}_{DECADE_LABELS[index]}"] = row.flow(month, index)
        records.append(record)
    return pd.DataFrame.from_records(records)

def read_flow_table(path: str) -> List[SegmentFlowRow]:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Flow table not found: {path}")
    return flow_rows_from_frame(pd.read_csv(path, header=0))

def read_channels(path: str) -> pd.DataFrame:
    """Read channel records (one per row, Channel field names as columns)."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Channel file not found: {path}")
    channels = pd.read_csv(path, header=0)
    if 'name' not in channels.columns:
        raise ValueError("Channel file has no 'name' column")
    return channels

def read_data(config: Dynaconf) -> Tuple[List[SegmentFlowRow], List[SegmentFlowRow], Optional[pd.DataFrame]]:
    """
    Read the flow tables and channel records named in the configuration.

    Flow tables that are not configured fall back to the bundled Table 16.
    """
    input_dir = config.get('input_directory', '.')
    files = config.get('files', {}) or {}

    if files.get('flow_part1'):
        part1 = read_flow_table(os.path.join(input_dir, files.get('flow_part1')))
    else:
        logger.info("Using bundled Table 16 for April-June")
        part1 = table16_part1()

    if files.get('flow_part2'):
        part2 = read_flow_table(os.path.join(input_dir, files.get('flow_part2')))
    else:
        logger.info("Using bundled Table 16 for July-October")
        part2 = table16_part2()

    channels = None
    if files.get('channels'):
        channels = read_channels(os.path.join(input_dir, files.get('channels')))

    return part1, part2, channels
