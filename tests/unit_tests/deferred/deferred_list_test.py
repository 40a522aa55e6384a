# -*- coding: utf-8 -*-

from vow.deferred import (CANCELLED, Deferred, DeferredList, Failure, all,
                          wrap_failure, wrap_result)
from vow.deferred.deferred_list import UNSET

N = 5


class TestResolvedDeferredList(object):

    def setup_method(self, method):
        self.deferreds = [wrap_result(n) for n in reversed(range(N))]
        self.dl = all(self.deferreds)

    def test_resolved_when_all_children_resolved(self):
        assert self.dl.called
        assert isinstance(self.dl, Deferred)

    def test_results_in_children_order(self):
        seen = []
        self.dl.then_call(seen.append)
        assert seen == [[4, 3, 2, 1, 0]]
        assert len(seen[0]) == N
        assert self.dl.completed_count == N

    def test_children_keep_their_result(self):
        assert [d.result for d in self.deferreds] == [4, 3, 2, 1, 0]


class TestDeferredList(object):

    def test_waits_for_all_children(self):
        d1, d2 = Deferred(), Deferred()
        dl = DeferredList([d1, d2])
        d2.resolve('b')
        assert not dl.called
        assert dl.results == [UNSET, 'b']
        assert dl.completed_count == 1
        d1.resolve('a')
        assert dl.result == ['a', 'b']

    def test_failures_kept_in_results(self):
        dl = DeferredList([wrap_failure('broken'), wrap_result(42)])
        assert dl.result == [Failure('broken'), 42]

    def test_result_list_not_modified_by_late_results(self):
        d = Deferred()
        dl = DeferredList([wrap_result(1), d], fire_on_first_result=True)
        d.resolve(2)
        assert dl.result == 1
        assert dl.results == [1, 2]


class TestEmptyDeferredList(object):

    def test_resolves_immediately(self):
        seen = []
        dl = DeferredList([])
        dl.then_call(seen.append)
        assert seen == [[]]

    def test_never_resolves_with_fire_on_first_result(self):
        seen = []
        dl = DeferredList([], fire_on_first_result=True)
        dl.both(seen.append)
        assert seen == []
        assert not dl.called

    def test_never_rejects_with_fire_on_first_error(self):
        dl = DeferredList([], fire_on_first_error=True)
        assert not dl.called


class TestFireOnFirstResult(object):

    def test_resolved_after_any_child_resolved(self):
        seen = []
        d = Deferred()
        dl = DeferredList([d, Deferred()], fire_on_first_result=True)
        d.resolve(42)
        dl.then_call(seen.append)
        assert seen == [42]

    def test_ignores_results_after_first(self):
        seen = []
        d = Deferred()
        dl = DeferredList([d, wrap_result(42)], fire_on_first_result=True)
        dl.then_call(seen.append)
        d.resolve(-42)
        assert seen == [42]
        assert dl.result == 42
        assert d.result == -42

    def test_does_not_fire_after_error(self):
        seen = []
        dl = all([wrap_failure('broken'), Deferred()],
                 fire_on_first_result=True)
        dl.both(seen.append)
        assert seen == []

    def test_does_not_fire_when_all_children_failed(self):
        dl = all([wrap_failure('a'), wrap_failure('b')],
                 fire_on_first_result=True)
        assert not dl.called
        assert dl.completed_count == 2


class TestFireOnFirstError(object):

    def test_rejected_after_any_child_rejected(self):
        seen = []
        d = Deferred()
        dl = DeferredList([d, Deferred()], fire_on_first_error=True)
        d.reject('broken')
        dl.fail_call(seen.append)
        assert seen == [Failure('broken')]

    def test_ignores_results_after_first_error(self):
        seen = []
        d = Deferred()
        dl = DeferredList([d, wrap_failure('broken')],
                          fire_on_first_error=True)
        dl.fail_call(seen.append)
        d.reject('broken again')
        assert seen == [Failure('broken')]
        assert dl.results == [Failure('broken again'), Failure('broken')]

    def test_does_not_fire_after_result(self):
        dl = all([wrap_result(42), Deferred()], fire_on_first_error=True)
        assert not dl.called

    def test_does_not_fire_when_all_children_resolved(self):
        dl = all([wrap_result(1), wrap_result(2)], fire_on_first_error=True)
        assert not dl.called


class TestConsumeErrors(object):

    def test_returns_none_instead_of_failures(self):
        dl = DeferredList([wrap_failure('broken'), wrap_result(42)],
                          consume_errors=True)
        assert dl.result == [None, 42]

    def test_children_go_on_with_callback_chain(self):
        seen = []
        d = wrap_failure('broken')
        dl = DeferredList([d, wrap_result(42)], consume_errors=True)
        assert dl.called
        d.fail(lambda _: seen.append('not called'))
        d.then(seen.append)
        assert seen == [None]

    def test_children_failures_kept_without_consume_errors(self):
        seen = []
        d = wrap_failure('broken')
        DeferredList([d, wrap_result(42)])
        d.then(lambda _: seen.append('not called'))
        d.fail_call(seen.append)
        assert seen == [Failure('broken')]


class TestCancelDeferredList(object):

    def test_cancels_its_children(self):
        cancelled = []
        d1 = Deferred(cancelled.append)
        d2 = Deferred()
        dl = DeferredList([d1, d2], cancel_deferreds_when_cancelled=True)
        dl.cancel()
        assert cancelled == [d1]
        assert d2.result == Failure(CANCELLED)
        assert dl.result == Failure(CANCELLED)

    def test_children_failures_after_cancel_are_ignored(self):
        d = Deferred()
        dl = DeferredList([d], cancel_deferreds_when_cancelled=True)
        dl.cancel()
        assert dl.completed_count == 1
        assert dl.results == [Failure(CANCELLED)]
        assert dl.result == Failure(CANCELLED)

    def test_children_not_cancelled_by_default(self):
        d = Deferred()
        dl = DeferredList([d])
        dl.cancel()
        assert dl.result == Failure(CANCELLED)
        assert not d.called
        d.resolve(1)
        assert dl.results == [1]
