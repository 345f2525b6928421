# -*- coding: utf-8 -*-

"""Manages settings and config file.

Settings are loaded from the file `eventual.ini`, in the user config folder.
If an entry is not in the file, its default value is used.
When an option is set, the config file is updated.

The module can be used without calling ``load()``: all entries will have
their default value.
"""

import configparser
import logging
import os.path
from . import path as eventual_path

_logger = logging.getLogger(__name__)


def _parse_levels(text):
    """Parse a dict entry, in the form 'module=LEVEL;module2=LEVEL2'."""
    levels = {}
    for pair in filter(None, text.split(';')):
        try:
            (module, level) = pair.split('=')
        except ValueError:
            _logger.warning('Unable to parse pair module=level: "%s"', pair)
            continue
        levels[module.strip()] = level.strip()
    return levels


# Valid config entries, with the function reading the raw value from the
# parser, and the default value.
_default_config = {
    'debug_mode': {
        'read': lambda p, key: p.getboolean('config', key),
        'default': False},
    'log_levels': {
        'read': lambda p, key: _parse_levels(p.get('config', key)),
        'default': {}},
    # Minimal delay (in seconds) applied to every scheduled callback.
    'scheduler_min_delay': {
        'read': lambda p, key: p.getfloat('config', key),
        'default': 0.0}
}

# Actual config parser
_config_parser = configparser.ConfigParser()
_config_parser.add_section('config')


def _get_config_file_path():
    return os.path.join(eventual_path.get_config_dir(), 'eventual.ini')


def load():
    """Find and load the config file."""
    config_file_path = _get_config_file_path()

    if not _config_parser.read(config_file_path):
        _logger.warning('Unable to load config file: %s', config_file_path)


def get(key):
    """Find and return a configuration entry

    If the entry is not specified in the config file, or if its value can't be
    converted to the expected type, the default value is returned.

    Args:
        key (str): the entry key.
    Returns:
        The corresponding value found.
    Raises:
        KeyError: if the config entry doesn't exists.
    """
    entry = _default_config[key]
    try:
        return entry['read'](_config_parser, key)
    except configparser.NoOptionError:
        return entry['default']
    except ValueError:
        _logger.warning('Invalid value for config entry "%s". Default value '
                        'will be used.', key)
        return entry['default']


def set(key, value):
    """Set a configuration entry.

    Args:
        key (str): the entry key.
        value: the new value to set. It will be converted to string. Dict
            values are written in the form 'key=value;key2=value2'.
    Raises:
        KeyError: if the config entry is not valid.
    """
    if key not in _default_config:
        raise KeyError(key)
    if isinstance(value, dict):
        value = ';'.join('%s=%s' % item for item in value.items())
    _config_parser.set('config', key, str(value))
    config_file_path = _get_config_file_path()
    try:
        with open(config_file_path, 'w') as config_file:
            _config_parser.write(config_file)
        _logger.debug('Config file modified.')
    except IOError:
        _logger.warning('Unable to write in the config file', exc_info=True)
