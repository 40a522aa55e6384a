# -*- coding: utf-8 -*-

from .errors import FailedError


class Failure(object):
    """Wrapper marking a value as belonging to the error branch of a chain.

    The value is usually an exception, but it can be anything: a string, an
    error code, or even another Failure. Only instances of this class make a
    Deferred switch to its fail branch.

    A Failure is immutable. Two Failures are equal if their values are equal.

    Attributes:
        value: the payload describing the error.
    """

    __slots__ = ('_value',)

    def __init__(self, value=None):
        object.__setattr__(self, '_value', value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError('Failure objects are immutable')

    def __eq__(self, other):
        if not isinstance(other, Failure):
            return NotImplemented
        return self._value == other._value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        try:
            return hash((Failure, self._value))
        except TypeError:
            # Unhashable value: equal values always have the same type.
            return hash((Failure, type(self._value)))

    def __repr__(self):
        return 'Failure(%r)' % (self._value,)

    @classmethod
    def wrap(cls, value):
        """Return ``value`` if it's already a Failure, else wrap it in one."""
        if isinstance(value, Failure):
            return value
        return cls(value)

    def raise_error(self):
        """Raise the payload as an exception.

        Raises:
            BaseException: the value itself, if it's an exception.
            FailedError: if the value is not an exception.
        """
        if isinstance(self._value, BaseException):
            raise self._value
        raise FailedError(self)
