# -*- coding: utf-8 -*-

from collections import deque, namedtuple
import logging
from .errors import AlreadyCalledError
from .failure import Failure

_logger = logging.getLogger(__name__)

# Value of the Failure set when a Deferred without canceller is cancelled.
CANCELLED = 'cancelled'

# Kinds of handler entries.
ON_SUCCESS = 'success'
ON_FAILURE = 'failure'
ON_BOTH = 'both'

HandlerEntry = namedtuple('HandlerEntry', ['kind', 'func'])

# How a handler call has ended.
_RETURNED = 'returned'
_RAISED = 'raised'

# Process-wide switch. ``vow.init()`` sets it from the config file.
_consume_thrown_exceptions = False


def get_consume_thrown_exceptions():
    """Tell if exceptions raised by handlers are converted into Failures.

    Returns:
        boolean: if False (default), an exception raised by a handler stops
            the chain and is propagated to the caller of ``resolve()``,
            ``reject()`` or of the method which added the handler.
    """
    return _consume_thrown_exceptions


def set_consume_thrown_exceptions(consume):
    """Enable or disable the conversion of raised exceptions into Failures.

    The setting is process-wide, and is used by all the Deferred chains
    executed after the call. It's kept in memory only: the config file is
    never modified.
    """
    global _consume_thrown_exceptions

    _consume_thrown_exceptions = bool(consume)


def _invoke(func, value):
    try:
        return _RETURNED, func(value)
    except Exception as error:
        return _RAISED, error


class Deferred(object):
    """A value, or an error, not available yet.

    Handlers are attached with ``then()``, ``fail()`` and ``both()``, and
    are executed in order as soon as the Deferred has a result (via
    ``resolve()`` or ``reject()``). Each handler receives the value returned
    by the previous one:
    - returning a ``Failure`` switches the chain to the fail branch; only
      handlers added by ``fail()`` or ``both()`` are called after that.
    - returning anything else switches the chain to the success branch.
    - returning another Deferred pauses the chain until this Deferred has
      a result, which is then used as the current result.

    Everything is synchronous: handlers added to a Deferred already settled
    are executed before the adding method returns.

    Attributes:
        called (boolean): True once resolved or rejected.
        result: the current result. None while pending; a Failure on the
            fail branch; the nested Deferred while paused.
        running (boolean): True while the handlers are executed.
        callbacks (deque of HandlerEntry): handlers not executed yet.
        pause_count (int): number of nested Deferred waited for.
    """

    IDLE = 'idle'
    DRAINING = 'draining'
    PAUSED = 'paused'

    def __init__(self, canceller=None):
        """Constructor of the Deferred.

        Args:
            canceller (callable, optional): called with the Deferred as only
                argument when ``cancel()`` is called. It's responsible for
                settling the Deferred. If not set, the cancellation rejects
                the Deferred with ``Failure(CANCELLED)``.
        """
        self.called = False
        self.result = None
        self.running = False
        self.callbacks = deque()
        self.pause_count = 0
        self._canceller = canceller
        self._suppress_already_called = False

    @property
    def state(self):
        """'idle', 'draining' or 'paused'. Handlers run only from 'idle'."""
        if self.running:
            return self.DRAINING
        if self.pause_count:
            return self.PAUSED
        return self.IDLE

    def then(self, callback):
        """Add a handler called with the result, on the success branch."""
        return self._add_handler(ON_SUCCESS, callback)

    def fail(self, errback):
        """Add a handler called with the Failure, on the fail branch."""
        return self._add_handler(ON_FAILURE, errback)

    def both(self, func):
        """Add a handler called on both branches (result or Failure)."""
        return self._add_handler(ON_BOTH, func)

    def then_return(self, value):
        """Replace the result by ``value``, on the success branch."""
        return self.then(lambda _result: value)

    def fail_return(self, value):
        """Replace the Failure by ``value``, on the fail branch."""
        return self.fail(lambda _failure: value)

    def then_call(self, func):
        """Call ``func(result)`` and keep the result, whatever it returns."""
        def call(result):
            func(result)
            return result
        return self.then(call)

    def fail_call(self, func):
        """Call ``func(failure)`` and keep the Failure, whatever it returns."""
        def call(failure):
            func(failure)
            return failure
        return self.fail(call)

    def safeguard(self):
        """Catch the Failure at this point of the chain and log it.

        Without error handler, a Failure is silently ignored. Calling
        ``safeguard()`` after all handlers are set logs it as ERROR, with the
        traceback when the Failure wraps an exception.
        The Failure is consumed: the chain goes back to the success branch,
        with None as result.
        """
        def guard(failure):
            exc_info = None
            if isinstance(failure.value, BaseException):
                exc_info = failure.value
            _logger.error('[SAFEGUARD] %r: %r', self, failure,
                          exc_info=exc_info)

        return self.fail(guard)

    def resolve(self, value=None):
        """Set the result, and execute the handlers on the success branch.

        Raises:
            AlreadyCalledError: if the Deferred has already a result.
        """
        self._start(value)

    def reject(self, error=None):
        """Set a Failure as result, and execute the handlers on the fail
        branch.

        Args:
            error: the Failure, or the value to wrap in a Failure.
        Raises:
            AlreadyCalledError: if the Deferred has already a result.
        """
        self._start(Failure.wrap(error))

    def cancel(self):
        """Cancel the Deferred.

        If a canceller was given, it's called and nothing else is done.
        Otherwise, a pending Deferred is rejected with Failure(CANCELLED), and
        the next call to ``resolve()`` or ``reject()`` (from the operation
        which has not been stopped) is silently ignored.
        A Deferred already called, but waiting for a nested Deferred, cancels
        the nested one.
        """
        if self._canceller is not None:
            _logger.debug('Cancel %r using its canceller', self)
            self._canceller(self)
        elif not self.called:
            _logger.debug('Cancel %r', self)
            self._suppress_already_called = True
            self.reject(Failure(CANCELLED))
        elif self.pause_count and isinstance(self.result, Deferred):
            _logger.debug('Cancel %r, nested in %r', self.result, self)
            self.result.cancel()

    def _start(self, result):
        if self.called:
            if self._suppress_already_called:
                self._suppress_already_called = False
                _logger.debug('Late result of cancelled %r ignored: %r',
                              self, result)
                return
            raise AlreadyCalledError(self)
        self.called = True
        self.result = result
        self._run_callbacks()

    def _add_handler(self, kind, func):
        self.callbacks.append(HandlerEntry(kind, func))
        if self.called:
            self._run_callbacks()
        return self

    def _matches(self, kind):
        if kind == ON_BOTH:
            return True
        if isinstance(self.result, Failure):
            return kind == ON_FAILURE
        return kind == ON_SUCCESS

    def _run_callbacks(self):
        if self.state != self.IDLE:
            return
        consume_thrown = get_consume_thrown_exceptions()
        self.running = True
        try:
            self._drain(consume_thrown)
        finally:
            self.running = False

    def _drain(self, consume_thrown):
        while True:
            if isinstance(self.result, Deferred):
                self._pause_on(self.result)
                if self.pause_count:
                    return
                continue

            if not self.callbacks:
                return
            entry = self.callbacks.popleft()
            if not self._matches(entry.kind):
                continue

            status, value = _invoke(entry.func, self.result)
            if status is _RAISED:
                if not consume_thrown:
                    raise value
                _logger.debug('Handler %r of %r raised %r', entry.func, self,
                              value)
                value = Failure(value)
            self.result = value

    def _pause_on(self, nested):
        self.pause_count += 1

        def resume(result):
            self.pause_count -= 1
            self.result = result
            self._run_callbacks()
            return result

        nested.both(resume)

    def __repr__(self):
        name = type(self).__name__
        if not self.called:
            return '<%s pending>' % name
        if self.pause_count:
            return '<%s paused on %r>' % (name, self.result)
        if isinstance(self.result, Failure):
            return '<%s failure=%r>' % (name, self.result.value)
        return '<%s result=%r>' % (name, self.result)


def wrap_result(value=None):
    """Create a Deferred already resolved with ``value``."""
    deferred = Deferred()
    deferred.resolve(value)
    return deferred


def wrap_failure(error=None):
    """Create a Deferred already rejected with ``error``.

    Args:
        error: a Failure, or the value to wrap in a Failure.
    """
    deferred = Deferred()
    deferred.reject(error)
    return deferred
