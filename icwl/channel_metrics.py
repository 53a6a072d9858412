"""
Derived metrics of stored channel records.

The metrics use the measured inflow and outflow of a channel:
    - loss_volume = in - out (kept as is, even when negative)
    - loss_percentage = loss_volume / in × 100
    - loss_per_km = loss_percentage / length
    - efficiency = out / in
and classify the channel as normal, high-loss or critical. The documented
condition of the channel can raise the status regardless of the measured loss.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional
import logging

import pandas as pd

from icwl.coefficients import normalize_category, season_from_date
from icwl.data_structures import Channel, ChannelMetrics
from icwl.formulas import AVERAGE_A, LossFactors, base_loss, loss_factors

logger = logging.getLogger(__name__)

NORMAL = 'normal'
HIGH_LOSS = 'high-loss'
CRITICAL = 'critical'

STATUS_SEVERITY: Dict[str, int] = {NORMAL: 0, HIGH_LOSS: 1, CRITICAL: 2}

CRITICAL_LOSS_PERCENT = 30
HIGH_LOSS_PERCENT = 15

CRITICAL_CONDITIONS = ('critical', 'poor')
HIGH_LOSS_CONDITIONS = ('satisfactory',)

DEFAULT_CONDITION = 'satisfactory'

# Defaults of the enhanced estimate when a record leaves a factor out
ENHANCED_DEFAULTS = {
    'coverage': 'earth',
    'condition': DEFAULT_CONDITION,
    'vegetation': 'moderate',
    'soil_type': 'loam',
}


def determine_status(loss_percentage: float, condition: Optional[str] = None) -> str:
    """First matching tier wins: critical, then high-loss, else normal."""
    condition = normalize_category(condition)
    if loss_percentage > CRITICAL_LOSS_PERCENT or condition in CRITICAL_CONDITIONS:
        return CRITICAL
    if loss_percentage > HIGH_LOSS_PERCENT or condition in HIGH_LOSS_CONDITIONS:
        return HIGH_LOSS
    return NORMAL


def derive_metrics(water_volume_in: float, water_volume_out: float, length: float,
                   condition: Optional[str] = DEFAULT_CONDITION) -> ChannelMetrics:
    """
    Args:
        water_volume_in: Measured inflow [m³/s]
        water_volume_out: Measured outflow [m³/s]
        length: Channel length [km]
        condition: Documented channel condition

    Returns:
        ChannelMetrics: loss volume [m³/s], loss percentage [%], loss per km [%/km],
            efficiency [-] and status
    """
    loss_volume = water_volume_in - water_volume_out
    loss_percentage = loss_volume * 100 / water_volume_in if water_volume_in > 0 else 0.0
    loss_per_km = loss_percentage / length if length > 0 else 0.0
    efficiency = water_volume_out / water_volume_in if water_volume_in > 0 else 1.0

    return ChannelMetrics(
        loss_volume=loss_volume,
        loss_percentage=loss_percentage,
        loss_per_km=loss_per_km,
        efficiency=efficiency,
        status=determine_status(loss_percentage, condition),
    )


def channel_metrics(channel: Channel) -> ChannelMetrics:
    condition = channel.condition or DEFAULT_CONDITION
    return derive_metrics(channel.water_volume_in, channel.water_volume_out, channel.length, condition)


def update_channel(channel: Channel) -> Channel:
    """
    Return a copy of the record with its derived fields recomputed.

    The season is filled from the measurement date when not set.
    """
    metrics = channel_metrics(channel)
    if metrics.loss_volume < 0:
        logger.warning("Channel %s: outflow exceeds inflow (%.3f > %.3f m3/s)",
                       channel.name, channel.water_volume_out, channel.water_volume_in)
    updated = channel.with_metrics(metrics)
    if updated.season is None and updated.measurement_date:
        try:
            updated.season = season_from_date(updated.measurement_date)
        except ValueError:
            logger.warning("Channel %s: unreadable measurement date %r, season left unset",
                           channel.name, updated.measurement_date)
    return updated


@dataclass(frozen=True)
class EnhancedLoss:
    """Seepage estimate of a channel adjusted by all factor coefficients"""
    base_loss: float
    enhanced_loss: float
    loss_percentage: float
    loss_per_km: float
    efficiency: float
    factors: LossFactors


def calculate_enhanced_loss(channel: Channel) -> EnhancedLoss:
    """
    Estimate the seepage of a channel from its inflow, length and factors.

    Unset categorical factors take the defaults of ENHANCED_DEFAULTS; an unset
    season or groundwater depth is neutral. Efficiency is in percent here.
    """
    q_in = channel.water_volume_in or 0.0
    length = channel.length or 0.0
    a = channel.filtration_coefficient or AVERAGE_A

    factors = loss_factors(
        condition=channel.condition or ENHANCED_DEFAULTS['condition'],
        vegetation=channel.vegetation or ENHANCED_DEFAULTS['vegetation'],
        groundwater_depth=channel.groundwater_depth,
        season=channel.season,
        soil_type=channel.soil_type or ENHANCED_DEFAULTS['soil_type'],
        coverage=channel.coverage or ENHANCED_DEFAULTS['coverage'],
    )
    loss = base_loss(q_in, length, a)
    enhanced = loss * factors.product

    loss_percentage = enhanced * 100 / q_in if q_in > 0 else 0.0
    return EnhancedLoss(
        base_loss=loss,
        enhanced_loss=enhanced,
        loss_percentage=loss_percentage,
        loss_per_km=loss_percentage / length if length > 0 else 0.0,
        efficiency=channel.water_volume_out * 100 / q_in if q_in > 0 else 100.0,
        factors=factors,
    )


_CHANNEL_FIELDS = {f.name for f in fields(Channel)}


def channel_from_record(record: Dict[str, Any]) -> Channel:
    """Build a Channel from a mapping, ignoring unknown keys and NaN values."""
    values = {k: v for k, v in record.items()
              if k in _CHANNEL_FIELDS and not (not isinstance(v, str) and pd.isna(v))}
    return Channel(**values)


def derive_channel_table(channels: pd.DataFrame) -> pd.DataFrame:
    """Recompute the derived columns of a table of channel records."""
    updated = [update_channel(channel_from_record(row)) for row in channels.to_dict(orient='records')]
    derived = pd.DataFrame([vars(c) for c in updated], index=channels.index)
    return derived
