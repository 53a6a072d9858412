from dataclasses import replace

import pandas as pd
import pytest

from icwl.data_structures import Month, decade_count
from icwl.formulas import base_loss
from icwl.hydrology import calculate_hydrology_table, propagate_chain, segment1_series
from icwl.topology import (
    SEGMENTS, MAIN_CANAL, AIO_2, AIO_3, AIO_4, Segment,
    active_segments, required_rows, validate_topology
)


def _with_flow(rows, number, month, index, value):
    """Copy of the flow rows with one decade value replaced."""
    updated = []
    for row in rows:
        if row.number == number:
            series = list(row.decades[month])
            series[index] = value
            decades = dict(row.decades)
            decades[month] = tuple(series)
            row = replace(row, decades=decades)
        updated.append(row)
    return updated


def test_topology_is_a_chain():
    validate_topology()
    assert [s.length for s in SEGMENTS] == [3.030, 6.020, 6.030, 0.744]
    assert not SEGMENTS[0].upstream
    assert all(s.upstream for s in SEGMENTS[1:])
    assert required_rows(SEGMENTS) == (MAIN_CANAL, AIO_4, AIO_2, AIO_3)


def test_invalid_topology():
    with pytest.raises(ValueError):
        validate_topology((Segment(1, 'a', 1.0, upstream=True),))
    with pytest.raises(ValueError):
        validate_topology((Segment(1, 'a', 1.0, upstream=False), Segment(2, 'b', 1.0, upstream=False)))


def test_transition_month_evaluates_first_reach_only():
    assert active_segments(Month.JUL) == SEGMENTS[:1]
    assert active_segments(Month.AUG) == SEGMENTS


def test_decade_keys(results):
    assert len(results) == 20
    assert [k for k in results if k.startswith('oct')] == ['oct_i', 'oct_ii']
    assert list(results)[:3] == ['apr_i', 'apr_ii', 'apr_iii']
    for month in Month:
        keys = [k for k in results if k.startswith(month.value)]
        assert len(keys) == decade_count(month)


def test_chain_rules(results):
    apr = results['apr_i']
    seg1, seg2, seg3, seg4 = apr.segments
    assert seg1.q_in == pytest.approx(1061.3 + 40.6)
    assert seg1.s == pytest.approx(base_loss(1061.3 + 40.6, 3.030))
    assert seg2.q_in == pytest.approx(seg1.q_out + 154.9 + 57.6)
    assert seg3.q_in == pytest.approx(seg2.q_out + 57.6)
    assert seg4.q_in == pytest.approx(seg3.q_out)
    assert apr.q_g == seg4.q_out
    assert apr.w_g == pytest.approx(86.4 * 10 * apr.q_g / 1e6)
    assert apr.w_total == pytest.approx(apr.w_g)


def test_outflow_is_inflow_plus_loss(results):
    for result in results.values():
        for seg in result.segments:
            if seg.is_empty:
                continue
            assert seg.q_out == seg.q_in + seg.s
            assert seg.s >= 0


def test_flow_grows_down_the_chain(results):
    for result in results.values():
        computed = [seg for seg in result.segments if not seg.is_empty]
        for upstream, downstream in zip(computed, computed[1:]):
            assert downstream.q_in >= upstream.q_out


def test_july_downstream_rows_are_empty(results):
    for key in ('jul_i', 'jul_ii', 'jul_iii'):
        result = results[key]
        assert result.segments[0].q_in == pytest.approx(
            {'jul_i': 9737.3 + 372.2, 'jul_ii': 9170.0 + 350.5, 'jul_iii': 9002.7 + 344.1}[key])
        assert all(seg.is_empty for seg in result.segments[1:])
        assert result.q_g is None
        assert result.w_g is None
        assert result.w_total is None


def test_missing_first_reach_input_empties_decade(part1, part2):
    part1 = _with_flow(part1, AIO_4, Month.APR, 1, None)
    results = calculate_hydrology_table(part1, part2)
    assert results['apr_ii'].is_empty
    assert not results['apr_i'].is_empty


def test_missing_downstream_input_empties_whole_decade(part1, part2):
    part1 = _with_flow(part1, AIO_2, Month.MAY, 0, None)
    results = calculate_hydrology_table(part1, part2)
    result = results['may_i']
    assert all(seg.is_empty for seg in result.segments)
    assert result.q_g is None and result.w_g is None and result.w_total is None


def test_july_needs_only_first_reach_inputs(part1, part2):
    part2 = _with_flow(part2, AIO_3, Month.JUL, 0, None)
    results = calculate_hydrology_table(part1, part2)
    assert not results['jul_i'].segments[0].is_empty


def test_halves_are_taken_by_month(part1, part2):
    part2 = _with_flow(part2, MAIN_CANAL, Month.APR, 0, 1.0)
    results = calculate_hydrology_table(part1, part2)
    assert results['apr_i'].segments[0].q_in == pytest.approx(1061.3 + 40.6)


def test_missing_row_raises(part1, part2):
    with pytest.raises(ValueError):
        calculate_hydrology_table([r for r in part1 if r.number != AIO_3], part2)


def test_propagate_chain_none_on_missing_input():
    assert propagate_chain({MAIN_CANAL: 100.0, AIO_4: None}, SEGMENTS[:1]) is None
    chain = propagate_chain({MAIN_CANAL: 0.0, AIO_4: 0.0}, SEGMENTS[:1])
    assert chain[0].q_in == 0 and chain[0].s == 0 and chain[0].q_out == 0


def test_return_volume_and_days(part1, part2):
    results = calculate_hydrology_table(part1, part2, days=11, return_volume=0.5)
    aug = results['aug_i']
    assert aug.w_g == pytest.approx(86.4 * 11 * aug.q_g / 1e6)
    assert aug.w_total == pytest.approx(aug.w_g + 0.5)


def test_parallel_matches_serial(part1, part2, results):
    parallel = calculate_hydrology_table(part1, part2, n_jobs=2)
    assert list(parallel) == list(results)
    pd.testing.assert_frame_equal(parallel.to_dataframe(), results.to_dataframe())


def test_to_dataframe(results):
    table = results.to_dataframe()
    assert table.shape == (20, 15)
    assert table.index.names == ['month', 'decade']
    assert pd.isna(table.loc[('jul', 'i'), 'segment_2_q_in'])
    assert table.loc[('aug', 'i'), 'q_g'] == results['aug_i'].q_g


def test_segment1_series(part1, part2):
    series = segment1_series(part1, part2)
    assert len(series) == 20
    assert series.loc[('jul', 'i'), 'q_x'] == pytest.approx(10109.5)
    row = series.loc[('oct', 'ii')]
    assert row['q_fx'] == pytest.approx(row['q_x'] + row['s'])


def test_segment1_series_missing_value(part1, part2):
    part2 = _with_flow(part2, MAIN_CANAL, Month.SEP, 2, None)
    series = segment1_series(part1, part2)
    assert series.loc[('sep', 'iii')].isna().all()
