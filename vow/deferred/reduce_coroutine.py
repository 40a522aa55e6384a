# -*- coding: utf-8 -*-

from functools import wraps
from .deferred import Deferred
from .failure import Failure


def reduce_coroutine(safeguard=False):
    """Decorator who converts a coroutine of Deferreds into a single Deferred.

    The greatest interest is the ability to write a function in an
    synchronous-like style, using many asynchronous Deferreds.
    Each Deferred yielded is waited for: its result is sent back to the
    generator, and its Failure is raised inside the generator.
    The coroutine ends when it returns, or when it yields a value which is
    not a Deferred. This value becomes the result of the resulting Deferred.

    Cancelling the resulting Deferred cancels the Deferred currently waited
    for.

    Args:
        safeguard (boolean): if true, use `Deferred.safeguard()` on the
            resulting Deferred.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            """
            Args:
                *args
                **kwargs
            Returns:
                Deferred<*>
            """
            waited = [None]

            def canceller(_df):
                if waited[0] is not None:
                    waited[0].cancel()

            df = Deferred(canceller)

            try:
                # Create generator; Initialization phase
                gen = func(*args, **kwargs)
            except Exception as error:
                df.reject(error)
                return _finish(df)

            def _call_next_or_set_result(value):
                if isinstance(value, Deferred):
                    waited[0] = value
                    value.both(on_result)
                else:
                    gen.close()
                    df.resolve(value)

            def on_result(result):
                waited[0] = None
                if isinstance(result, Failure):
                    iter_error(result)
                else:
                    iter_next(result)
                return result

            def iter_next(value):
                try:
                    next_value = gen.send(value)
                except StopIteration as stop:
                    return df.resolve(stop.value)
                except Exception as error:
                    return df.reject(error)
                _call_next_or_set_result(next_value)

            def iter_error(failure):
                try:
                    try:
                        failure.raise_error()
                    except Exception as error:
                        next_value = gen.throw(error)
                except StopIteration as stop:
                    return df.resolve(stop.value)
                except Exception as error:
                    # Not caught by the generator
                    if error is failure.value or \
                            getattr(error, 'failure', None) is failure:
                        return df.reject(failure)
                    return df.reject(error)
                _call_next_or_set_result(next_value)

            # Start and resolve loop.
            try:
                first_value = next(gen)
            except StopIteration as stop:
                df.resolve(stop.value)
                return _finish(df)
            except Exception as error:
                df.reject(error)
                return _finish(df)
            _call_next_or_set_result(first_value)

            return _finish(df)

        def _finish(df):
            if safeguard:
                df.safeguard()
            return df

        return wrapper
    return decorator
