# -*- coding: utf-8 -*-

from functools import wraps
from .deferred import Deferred, wrap_failure, wrap_result


def wrap_deferred(f):
    """Decorator who converts the result in a Deferred object.

    If the function decorated returns a Deferred, it's transmitted as is.
    Else, a new Deferred is created with the returned value as result. If the
    function raises an exception, the Deferred is rejected with it.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            result = f(*args, **kwargs)
        except Exception as error:
            return wrap_failure(error)
        if isinstance(result, Deferred):
            return result
        return wrap_result(result)

    return wrapper
