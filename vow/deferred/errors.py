# -*- coding: utf-8 -*-


class AlreadyCalledError(Exception):
    """A Deferred has been resolved or rejected more than once."""

    def __init__(self, deferred):
        Exception.__init__(self, '%r has already been called' % deferred)
        self.deferred = deferred


class FailedError(Exception):
    """Raised in place of a Failure whose payload is not an exception."""

    def __init__(self, failure):
        Exception.__init__(self, 'Failure: %r' % (failure.value,))
        self.failure = failure
