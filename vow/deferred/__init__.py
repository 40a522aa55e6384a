# -*- coding: utf-8 -*-

from .decorators import wrap_deferred
from .deferred import (CANCELLED, Deferred, get_consume_thrown_exceptions,
                       set_consume_thrown_exceptions, wrap_failure,
                       wrap_result)
from .deferred_list import DeferredList, all
from .errors import AlreadyCalledError, FailedError
from .failure import Failure
from .reduce_coroutine import reduce_coroutine

__all__ = ['AlreadyCalledError', 'CANCELLED', 'Deferred', 'DeferredList',
           'FailedError', 'Failure', 'all', 'get_consume_thrown_exceptions',
           'reduce_coroutine', 'set_consume_thrown_exceptions',
           'wrap_deferred', 'wrap_failure', 'wrap_result']
