import pandas as pd
import pytest
import yaml

from icwl.data_structures import Month
from icwl.read_data import (
    flow_rows_from_frame, flow_rows_to_frame, read_channels, read_data, read_flow_table
)
from icwl.utils import load_config, load_results


def test_read_flow_table(tmp_path, part1):
    path = tmp_path / 'part1.csv'
    flow_rows_to_frame(part1).to_csv(path, index=False)

    rows = read_flow_table(str(path))
    assert [r.number for r in rows] == [1, 2, 3, 4, 5]
    assert rows[0].omega == 1061.3
    assert rows[4].flow(Month.MAY, 2) == 645.2
    assert len(rows[0].decades[Month.OCT]) == 2


def test_empty_cells_are_unmeasured():
    table = pd.DataFrame({'number': [1], 'name': ['1-MK'], 'apr_i': [10.0], 'apr_ii': [None]})
    row = flow_rows_from_frame(table)[0]
    assert row.flow(Month.APR, 0) == 10.0
    assert row.flow(Month.APR, 1) is None
    assert row.flow(Month.APR, 2) is None
    assert row.flow(Month.MAY, 0) is None
    assert row.omega is None


@pytest.mark.parametrize("column", ['nov_i', 'oct_iii', 'apr_iv', 'flow'])
def test_unrecognised_columns(column):
    table = pd.DataFrame({'number': [1], 'name': ['1-MK'], column: [1.0]})
    with pytest.raises(ValueError):
        flow_rows_from_frame(table)


def test_non_numeric_flow():
    table = pd.DataFrame({'number': [1], 'name': ['1-MK'], 'apr_i': ['high']})
    with pytest.raises(ValueError):
        flow_rows_from_frame(table)


def test_missing_id_columns():
    with pytest.raises(ValueError):
        flow_rows_from_frame(pd.DataFrame({'apr_i': [1.0]}))


def test_missing_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_flow_table(str(tmp_path / 'missing.csv'))
    with pytest.raises(FileNotFoundError):
        read_channels(str(tmp_path / 'missing.csv'))
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_results(tmp_path / 'missing.csv')


def _write_config(tmp_path, settings):
    with open(tmp_path / 'config.yaml', 'w', encoding='utf-8') as f:
        yaml.safe_dump(settings, f)


def test_load_config_merges_environment(tmp_path):
    _write_config(tmp_path, {
        'default': {'hydrology': {'filtration_coefficient': 2.08, 'days_in_decade': 10}},
        'strong': {'hydrology': {'filtration_coefficient': 3.15}},
    })
    config = load_config(tmp_path, 'strong')
    assert config.hydrology.filtration_coefficient == 3.15
    assert config.hydrology.days_in_decade == 10

    config = load_config(tmp_path)
    assert config.hydrology.filtration_coefficient == 2.08


def test_read_data_defaults_to_bundled_tables(tmp_path):
    _write_config(tmp_path, {'default': {'input_directory': str(tmp_path)}})
    part1, part2, channels = read_data(load_config(tmp_path))
    assert len(part1) == 5 and len(part2) == 5
    assert part1[0].omega is not None
    assert part2[0].omega is None
    assert channels is None


def test_read_data_from_files(tmp_path, part1, part2):
    flow_rows_to_frame(part1).to_csv(tmp_path / 'p1.csv', index=False)
    flow_rows_to_frame(part2).to_csv(tmp_path / 'p2.csv', index=False)
    pd.DataFrame({'name': ['a'], 'length': [1.0]}).to_csv(tmp_path / 'channels.csv', index=False)
    _write_config(tmp_path, {'default': {
        'input_directory': str(tmp_path),
        'files': {'flow_part1': 'p1.csv', 'flow_part2': 'p2.csv', 'channels': 'channels.csv'},
    }})
    rows1, rows2, channels = read_data(load_config(tmp_path))
    assert rows1[2].flow(Month.JUN, 1) == 2926.2
    assert rows2[3].flow(Month.OCT, 1) == 125.7
    assert list(channels['name']) == ['a']


def test_channels_need_a_name(tmp_path):
    pd.DataFrame({'length': [1.0]}).to_csv(tmp_path / 'channels.csv', index=False)
    with pytest.raises(ValueError):
        read_channels(str(tmp_path / 'channels.csv'))


def test_load_results(tmp_path, results):
    path = tmp_path / 'hydrology_table.csv'
    results.to_dataframe().to_csv(path)
    table = load_results(path)
    assert len(table) == 20
    assert table.loc[('aug', 'i'), 'q_g'] == pytest.approx(results['aug_i'].q_g)


def test_unknown_environment_warns(tmp_path, caplog):
    _write_config(tmp_path, {
        'default': {'hydrology': {'filtration_coefficient': 2.08}},
        'strong_filtration': {'hydrology': {'filtration_coefficient': 3.15}},
    })
    config = load_config(tmp_path, 'strong_filtraton')
    assert config.hydrology.filtration_coefficient == 2.08
    assert 'strong_filtraton' in caplog.text
    assert 'not found' in caplog.text


def test_default_environment_does_not_warn(tmp_path, caplog):
    _write_config(tmp_path, {'default': {'hydrology': {'filtration_coefficient': 2.08}}})
    load_config(tmp_path)
    assert 'not found' not in caplog.text
