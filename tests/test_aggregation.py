import pandas as pd
import pytest

from icwl.aggregation import (
    cumulative_volume, decade_volume, monthly_totals, season_total, total_volume
)
from icwl.utils import FlowUnit, flow_volume


def test_decade_volume_example():
    assert decade_volume(500) == pytest.approx(0.432)
    assert decade_volume(500, days=10) == pytest.approx(0.432)


def test_unset_intake_gives_unset_volumes():
    assert decade_volume(None) is None
    assert total_volume(None) is None
    assert total_volume(None, 2.0) is None


def test_total_volume_adds_return_flow():
    assert total_volume(0.432) == pytest.approx(0.432)
    assert total_volume(0.432, 0.1) == pytest.approx(0.532)


def test_decade_volume_matches_unit_conversion():
    assert flow_volume(500, 10).magnitude == pytest.approx(decade_volume(500))
    assert flow_volume(0.5, 10, 'm3/s').magnitude == pytest.approx(0.432)


def test_flow_unit_conversion():
    assert FlowUnit.convert(1500, 'L/s', 'm3/s') == pytest.approx(1.5)
    assert FlowUnit.convert(2.0, FlowUnit.CUBIC_METER_PER_SECOND, FlowUnit.LITER_PER_SECOND) == pytest.approx(2000)
    assert FlowUnit.convert(3.0, 'L/s', 'L/s') == 3.0


def test_monthly_totals(results):
    totals = monthly_totals(results)
    assert list(totals.index) == ['apr', 'may', 'jun', 'jul', 'aug', 'sep', 'oct']
    assert pd.isna(totals.loc['jul', 'w_total'])
    assert totals.loc['jul', 'decades'] == 0
    assert totals.loc['oct', 'decades'] == 2
    expected = sum(results[k].w_total for k in ('aug_i', 'aug_ii', 'aug_iii'))
    assert totals.loc['aug', 'w_total'] == pytest.approx(expected)


def test_season_total_skips_unset_decades(results):
    expected = sum(r.w_total for r in results.values() if r.w_total is not None)
    assert season_total(results) == pytest.approx(expected)


def test_cumulative_volume(results):
    cumulative = cumulative_volume(results)
    assert list(cumulative) == list(results)
    assert cumulative['jul_ii'] is None
    assert cumulative['jun_iii'] == pytest.approx(cumulative['aug_i'] - results['aug_i'].w_total)
    assert cumulative['oct_ii'] == pytest.approx(season_total(results))
