import pytest
import yaml

from expense_tracker import config


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.delenv('EXPENSE_TRACKER_DB', raising=False)
    monkeypatch.delenv('EXPENSE_TRACKER_EDIT_DATE_POLICY', raising=False)

    cfg = config.load_config(tmp_path / 'missing.yaml')

    assert cfg == config.DEFAULT_CONFIG


def test_file_values_merge_over_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv('EXPENSE_TRACKER_DB', raising=False)
    monkeypatch.delenv('EXPENSE_TRACKER_EDIT_DATE_POLICY', raising=False)
    path = tmp_path / 'config.yaml'
    path.write_text('edit_date_policy: Explicit\ndefault_filter: week\n')

    cfg = config.load_config(path)

    assert cfg['edit_date_policy'] == 'explicit'
    assert cfg['default_filter'] == 'WEEK'
    assert cfg['db_path'] == 'expenses.db'


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / 'config.yaml'
    path.write_text('db_path: from-file.db\n')
    monkeypatch.setenv('EXPENSE_TRACKER_DB', 'from-env.db')
    monkeypatch.setenv('EXPENSE_TRACKER_EDIT_DATE_POLICY', 'today')

    cfg = config.load_config(path)

    assert cfg['db_path'] == 'from-env.db'
    assert cfg['edit_date_policy'] == 'today'


def test_invalid_values_raise(tmp_path, monkeypatch):
    monkeypatch.delenv('EXPENSE_TRACKER_EDIT_DATE_POLICY', raising=False)
    path = tmp_path / 'config.yaml'
    path.write_text('edit_date_policy: never\n')
    with pytest.raises(ValueError):
        config.load_config(path)

    path.write_text('- just\n- a list\n')
    with pytest.raises(ValueError):
        config.load_config(path)


def test_save_config_round_trip(tmp_path, monkeypatch):
    monkeypatch.delenv('EXPENSE_TRACKER_DB', raising=False)
    monkeypatch.delenv('EXPENSE_TRACKER_EDIT_DATE_POLICY', raising=False)
    path = tmp_path / 'nested' / 'config.yaml'
    config.save_config({'db_path': 'x.db', 'edit_date_policy': 'today'}, path)

    assert yaml.safe_load(path.read_text()) == {'db_path': 'x.db', 'edit_date_policy': 'today'}
    assert config.load_config(path)['edit_date_policy'] == 'today'
