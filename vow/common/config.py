# -*- coding: utf-8 -*-

"""Manages the settings of the library.

Settings are kept in memory, in a ``configparser`` section. They can be
loaded from a configuration file; if an entry is missing, a default value is
provided.
When an option is set and a config file has been loaded, the file is
updated.

The settings are process-wide: a change is seen by every module at once.
"""

import configparser
import logging
import os
import appdirs

_logger = logging.getLogger(__name__)


# Default config dict. Values not present in this dict are not valid.
# Each entry contains the type expected, and the default value.
_default_config = {
    'consume_thrown_exceptions': {'type': bool, 'default': False},
    'debug_mode': {'type': bool, 'default': False},
    'log_levels': {'type': dict, 'default': {}}
}

# Actual config parser
_config_parser = configparser.ConfigParser()
_config_parser.add_section('config')

# Path of the file loaded by ``load()``, if any.
_config_file_path = None


def _get_config_dir():
    return appdirs.user_config_dir(appname='vow', appauthor=False,
                                   roaming=True)


def _get_default_config_file_path():
    return os.path.join(_get_config_dir(), 'vow.ini')


def load(config_file_path=None):
    """Find and load the config file.

    Args:
        config_file_path (str, optional): path of the file to read. Default
            to 'vow.ini', in the user config folder.
    """
    global _config_file_path

    if config_file_path is None:
        config_file_path = _get_default_config_file_path()
    _config_file_path = config_file_path

    try:
        if not _config_parser.read(config_file_path):
            _logger.warning('Unable to load config file: %s'
                            % config_file_path)
    except configparser.Error:
        _logger.warning('Invalid config file: %s' % config_file_path,
                        exc_info=True)


def reset():
    """Drop all the values set, and forget the loaded config file."""
    global _config_file_path

    _config_parser.remove_section('config')
    _config_parser.add_section('config')
    _config_file_path = None


def get(key):
    """Find and return a configuration entry

    If the entry is not specified, a default value is returned.

    Args:
        key (string): the entry key.
    Returns:
        The corresponding value found.
    Raises:
        KeyError: if the config entry doesn't exists.
    """
    if key not in _default_config:
        raise KeyError(key)
    try:
        if _default_config[key]['type'] is bool:
            return _config_parser.getboolean('config', key)
        elif _default_config[key]['type'] is int:
            return _config_parser.getint('config', key)
        elif _default_config[key]['type'] is dict:
            # Dict entries are in the form 'key=value;key2=value2'
            dict_str = _config_parser.get('config', key)
            result = {}
            for pair in filter(None, dict_str.split(';')):
                try:
                    (k, v) = pair.split('=')
                    result[k.strip()] = v.strip()
                except ValueError:
                    _logger.warning('Unable to parse pair key=value: "%s"'
                                    % pair)
            return result
        else:
            return _config_parser.get('config', key)
    except configparser.NoOptionError:
        return _default_config[key]['default']
    except ValueError:
        _logger.warning('Invalid value for config "%s". Default value '
                        'will be used.' % key)
        return _default_config[key]['default']


def set(key, value):
    """Set a configuration entry.

    Args:
        key (string): the entry key.
        value: the new value to set. It will be converted to string. Dict
            values are stored in the form 'key=value;key2=value2'.
    Raises:
        KeyError: if the config entry is not valid.
    """
    if key not in _default_config:
        raise KeyError(key)
    if isinstance(value, dict):
        value = ';'.join('%s=%s' % item for item in sorted(value.items()))
    _config_parser.set('config', key, str(value))

    if _config_file_path is None:
        return
    try:
        config_dir = os.path.dirname(_config_file_path)
        if config_dir and not os.path.isdir(config_dir):
            os.makedirs(config_dir)
        with open(_config_file_path, 'w') as config_file:
            _config_parser.write(config_file)
        _logger.debug('Config file modified.')
    except (OSError, IOError):
        _logger.warning('Unable to write in the config file', exc_info=True)
