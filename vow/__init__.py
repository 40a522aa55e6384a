# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa

import logging

from .common import config
from .common import log
from .deferred import (AlreadyCalledError, Deferred, DeferredList, Failure,
                       set_consume_thrown_exceptions, wrap_failure,
                       wrap_result)

__all__ = ['AlreadyCalledError', 'Deferred', 'DeferredList', 'Failure',
           'init', 'wrap_failure', 'wrap_result']


def init(config_file_path=None):
    """Load the config file, and apply its settings.

    Calling it is optional: without config file, default values are used
    and the logging module is not configured.

    Args:
        config_file_path (str, optional): path of the config file. Default to
            'vow.ini' in the user config folder.
    """
    config.load(config_file_path)
    log.set_debug_mode(config.get('debug_mode'))
    log.set_logs_level(config.get('log_levels'))

    consume = config.get('consume_thrown_exceptions')
    set_consume_thrown_exceptions(consume)
    logging.getLogger(__name__).debug(
        'vow initialized (consume_thrown_exceptions=%s)', consume)
