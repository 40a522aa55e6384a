# -*- coding: utf-8 -*-

import logging
from functools import partial
from .deferred import Deferred
from .failure import Failure

_logger = logging.getLogger(__name__)


class _Unset(object):
    def __repr__(self):
        return 'UNSET'


# Content of the result slots of the children not settled yet.
UNSET = _Unset()


class DeferredList(Deferred):
    """A Deferred settled from the results of a list of Deferreds.

    By default, the DeferredList waits for all its children to be settled,
    then it's resolved with the list of their results, in the same order as
    the children. A failed child is represented by its Failure, or by None
    if ``consume_errors`` is set.

    Options change when the list fires:
    - ``fire_on_first_result``: resolved with the value of the first child
      resolved. A rejected child never fires the list, and an empty list
      never fires at all.
    - ``fire_on_first_error``: rejected with the Failure of the first child
      rejected. A list without rejected child never fires.

    The list settles only once; later results of its children are recorded
    in ``results``, but are otherwise ignored.

    The handler added to each child returns the child result unchanged,
    except with ``consume_errors``: a Failure is then consumed, and the
    chain of the child goes on with None on the success branch.
    """

    def __init__(self, deferreds, fire_on_first_result=False,
                 fire_on_first_error=False, consume_errors=False,
                 cancel_deferreds_when_cancelled=False):
        """Constructor of the DeferredList.

        Args:
            deferreds (list of Deferred): the children. They can be already
                settled.
            fire_on_first_result (boolean): fire with the first result.
            fire_on_first_error (boolean): fire with the first Failure.
            consume_errors (boolean): if set, Failures are replaced by None
                in the list of results.
            cancel_deferreds_when_cancelled (boolean): if set, cancelling the
                list cancels all its children.
        """
        Deferred.__init__(self)
        self.deferreds = list(deferreds)
        self.fire_on_first_result = fire_on_first_result
        self.fire_on_first_error = fire_on_first_error
        self.consume_errors = consume_errors
        self.cancel_deferreds_when_cancelled = cancel_deferreds_when_cancelled

        self.results = [UNSET] * len(self.deferreds)
        self.completed_count = 0

        for index, deferred in enumerate(self.deferreds):
            deferred.both(partial(self._on_child_result, index))

        if not self.deferreds and self._fires_when_complete():
            self.resolve([])

    def _fires_when_complete(self):
        return not (self.fire_on_first_result or self.fire_on_first_error)

    def cancel(self):
        """Cancel the list and, if configured to, all its children."""
        Deferred.cancel(self)
        if self.cancel_deferreds_when_cancelled:
            for deferred in self.deferreds:
                deferred.cancel()

    def _on_child_result(self, index, result):
        is_failure = isinstance(result, Failure)
        if is_failure and self.consume_errors:
            self.results[index] = None
        else:
            self.results[index] = result
        self.completed_count += 1

        if not self.called:
            if is_failure and self.fire_on_first_error:
                self.reject(result)
            elif not is_failure and self.fire_on_first_result:
                self.resolve(result)
            elif (self.completed_count == len(self.deferreds) and
                    self._fires_when_complete()):
                self.resolve(list(self.results))
        else:
            _logger.debug('Result #%d of %r ignored: %r', index, self, result)

        if is_failure and self.consume_errors:
            return None
        return result


def all(deferreds, **options):  # noqa
    """Create a DeferredList.

    Args:
        deferreds (list of Deferred): the children.
        **options: options of the DeferredList: ``fire_on_first_result``,
            ``fire_on_first_error``, ``consume_errors`` and
            ``cancel_deferreds_when_cancelled``.
    Returns:
        DeferredList: Deferred settled according to the options.
    """
    return DeferredList(deferreds, **options)
