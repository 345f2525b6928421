# -*- coding: utf-8 -*-

import logging
import os.path
import pytest

from eventual.common import config


@pytest.fixture
def config_file(tmpdir, monkeypatch):
    """Redirect the config file into a temporary folder.

    Returns:
        str: path of the config file (not created).
    """
    path = str(tmpdir.join('eventual.ini'))
    monkeypatch.setattr(config, '_get_config_file_path', lambda: path)
    monkeypatch.setattr(config, '_config_parser',
                        config.configparser.ConfigParser())
    config._config_parser.add_section('config')
    return path


class TestConfigLoad(object):

    def test_load_without_file(self, config_file, caplog):
        with caplog.at_level(logging.WARNING, logger='eventual.common.config'):
            config.load()
        assert 'Unable to load config file' in caplog.text
        assert config.get('debug_mode') is False

    def test_load_existing_file(self, config_file):
        with open(config_file, 'w') as f:
            f.write('[config]\n'
                    'debug_mode = true\n'
                    'scheduler_min_delay = 0.004\n'
                    'log_levels = eventual=info;eventual.scheduler=DEBUG\n')

        config.load()
        assert config.get('debug_mode') is True
        assert config.get('scheduler_min_delay') == 0.004
        assert config.get('log_levels') == {'eventual': 'info',
                                            'eventual.scheduler': 'DEBUG'}


class TestConfigGet(object):

    def test_get_unknown_key(self, config_file):
        with pytest.raises(KeyError):
            config.get('foo')

    def test_get_default_values(self, config_file):
        assert config.get('debug_mode') is False
        assert config.get('log_levels') == {}
        assert config.get('scheduler_min_delay') == 0.0

    def test_get_invalid_bool(self, config_file):
        config._config_parser.set('config', 'debug_mode', 'maybe')
        assert config.get('debug_mode') is False

    def test_get_invalid_float(self, config_file):
        config._config_parser.set('config', 'scheduler_min_delay', 'soon')
        assert config.get('scheduler_min_delay') == 0.0

    def test_get_dict_with_invalid_pair(self, config_file):
        config._config_parser.set('config', 'log_levels',
                                  'eventual=info;garbage;a=b=c')
        assert config.get('log_levels') == {'eventual': 'info'}


class TestConfigSet(object):

    def test_set_unknown_key(self, config_file):
        with pytest.raises(KeyError):
            config.set('foo', 'bar')

    def test_set_writes_file(self, config_file):
        config.set('scheduler_min_delay', 0.01)

        assert os.path.exists(config_file)
        assert config.get('scheduler_min_delay') == 0.01

        with open(config_file) as f:
            assert 'scheduler_min_delay = 0.01' in f.read()

    def test_set_dict_value(self, config_file):
        config.set('log_levels', {'eventual': 'WARNING'})
        assert config.get('log_levels') == {'eventual': 'WARNING'}

    def test_set_with_unwritable_file(self, config_file, tmpdir, monkeypatch,
                                      caplog):
        path = str(tmpdir.join('missing-dir', 'eventual.ini'))
        monkeypatch.setattr(config, '_get_config_file_path', lambda: path)

        with caplog.at_level(logging.WARNING, logger='eventual.common.config'):
            config.set('debug_mode', True)
        assert 'Unable to write in the config file' in caplog.text
