# -*- coding: utf-8 -*-
"""Helpers function to find the folders used by eventual."""

import logging
import os
import appdirs

_logger = logging.getLogger(__name__)


_appdirs = appdirs.AppDirs(appname='eventual', appauthor=False)


def _ensure_dir_exists(dir_path):
    """Try to create the folder if it not exists.

    If an error occurs, a warning log is sent and the error is ignored.
    """
    if os.path.isdir(dir_path):
        return
    try:
        os.makedirs(dir_path, exist_ok=True)
        _logger.debug('Created missing folder "%s"', dir_path)
    except OSError:
        _logger.warning('Unable to create the missing folder "%s"',
                        dir_path, exc_info=True)


def get_log_dir():
    """Returns the directory path containing the log files."""
    log_dir = _appdirs.user_log_dir
    _ensure_dir_exists(log_dir)
    return log_dir


def get_config_dir():
    """Returns the directory path containing the config file."""
    config_dir = _appdirs.user_config_dir
    _ensure_dir_exists(config_dir)
    return config_dir
