# -*- coding: utf-8 -*-

import logging
from functools import partial
from threading import Lock

from ..scheduler import get_scheduler
from .errors import TimeoutError
from .util import as_exception, unwrap_error

_logger = logging.getLogger(__name__)


def _identity(value):
    return value


def _rethrow(reason):
    raise as_exception(reason)


def is_promise(value):
    """Check if a value is a Promise, and so should be adopted when chained.

    Only instances of `Promise` are adopted. Other objects, even those having
    a `then()` method, are regular values.
    """
    return isinstance(value, Promise)


class Promise(object):
    """It represents an operation expected to be completed in the future.

    A Promise contains a value not yet known when the Promise is created. It
    allows to set callbacks who will be called as soon as the result is
    known. It's a "promise" of a future value.

    A Promise is settled only once: either fulfilled with a value, or
    rejected with a reason. The reason is usually an exception, but can be
    any value.

    Callbacks are never called synchronously: they're submitted to the
    scheduler (see `eventual.scheduler`) and run after the current task.
    Callbacks set on the same Promise are called in the order they were set.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, executor, _name=None):
        """Constructor of the Promise.

        Generate the two callbacks for the executor, then call the `executor`.
        It means the executor will be fully executed before the constructor
        returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `on_fulfilled()` should be called when the
                Promise is fulfilled (ie the task is done) and must accept the
                result's value as its only argument.
                The second, `on_rejected()`, should be called when an error
                occurs. Its argument is the rejection reason.
                Only the first call to one of them is taken into account.
            _name (str): if set, name used when converted to text.
        """
        self._state = self.PENDING
        self._outcome = None
        self._waiters = []
        self._lock = Lock()
        self._scheduler = get_scheduler()
        self._name = _name or getattr(executor, '__name__', '???')

        def on_fulfilled(value):
            self._settle(self.FULFILLED, value)

        def on_rejected(reason):
            self._settle(self.REJECTED, reason)

        try:
            executor(on_fulfilled, on_rejected)
        except Exception as error:
            on_rejected(unwrap_error(error))

    @property
    def state(self):
        """str: one of `PENDING`, `FULFILLED` or `REJECTED`."""
        return self._state

    def _is_settled(self):
        return self._state != self.PENDING

    def _settle(self, state, outcome):
        with self._lock:
            if self._state != self.PENDING:
                _logger.debug('Promise %r already settled. New outcome will '
                              'be ignored: %r', self, outcome)
                return
            self._outcome = outcome
            self._state = state

            waiters = self._waiters
            # Free the references
            self._waiters = None

            # Submitted under the lock: a then() from another thread can't
            # get its callback scheduled before the waiters.
            if waiters:
                self._scheduler.schedule(self._run_waiters, 0, waiters)
            else:
                self._scheduler.wakeup()

    def _run_waiters(self, waiters):
        for on_settle_fulfilled, on_settle_rejected in waiters:
            if self._state == self.FULFILLED:
                self._exec_callback(on_settle_fulfilled, self._outcome)
            else:
                self._exec_callback(on_settle_rejected, self._outcome)

    @staticmethod
    def _exec_callback(callback, value):
        try:
            callback(value)
        except Exception:
            _logger.exception('Promise callback %r has raised an exception!',
                              callback)

    def _add_waiter(self, on_settle_fulfilled, on_settle_rejected):
        """Register a pair of callbacks, called when the Promise settles.

        If the Promise is already settled, the matching callback is scheduled
        right now.
        """
        with self._lock:
            if self._state == self.PENDING:
                self._waiters.append((on_settle_fulfilled, on_settle_rejected))
                return

            if self._state == self.FULFILLED:
                callback = on_settle_fulfilled
            else:
                callback = on_settle_rejected
            self._scheduler.schedule(self._exec_callback, 0, callback,
                                     self._outcome)

    def result(self, timeout=None):
        """Wait for the result and returns it as soon as it's available.

        While waiting, the scheduler's tasks are executed by the calling
        thread. It must not be called from a Promise callback.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled, in seconds. By default, it can wait
                indefinitely.
        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            *: If the promise is rejected, the rejection reason is raised.
                Reasons who aren't exceptions are wrapped in a
                `PromiseRejected`.
        """
        if not self._scheduler.run_until(self._is_settled, timeout):
            raise TimeoutError('%r is still pending' % self)

        if self._state == self.REJECTED:
            raise as_exception(self._outcome)
        return self._outcome

    def exception(self, timeout=None):
        """Wait for the promise rejection and returns its reason.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled, in seconds. By default, it can wait
                indefinitely.
        Returns:
            *: the reason of the rejection of the Promise. None if the
                promise is fulfilled.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
        """
        if not self._scheduler.run_until(self._is_settled, timeout):
            raise TimeoutError('%r is still pending' % self)

        if self._state == self.REJECTED:
            return self._outcome
        return None

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called. The callback is never called before `then()`
        returns, even if the promise is already settled.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be fulfilled with this value.
        - Another Promise: when settled, will transfer its status (state and
            result/reason) to the Promise returned by this method.

        If a callback is not defined, the state of the self promise is
        transferred at the new promise (the state and the value/reason).

        Args:
            on_fulfilled (callable, optional):  This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                rejection reason of the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """
        if on_fulfilled is None:
            fulfilled_callback = _identity
        else:
            fulfilled_callback = on_fulfilled
        if on_rejected is None:
            rejected_callback = _rethrow
        else:
            rejected_callback = on_rejected

        def chained_promise(fulfilled, rejected):

            def handle(callback, outcome):
                try:
                    result = callback(outcome)
                except Exception as error:
                    return rejected(unwrap_error(error))

                if is_promise(result):
                    result.then(fulfilled, rejected)
                else:
                    fulfilled(result)

            self._add_waiter(partial(handle, fulfilled_callback),
                             partial(handle, rejected_callback))

        if not on_rejected:
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not on_fulfilled:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))
        # Only the direct source is named; no reference to it is kept.
        source_name = self._name.rsplit(' -> ', 1)[-1]
        return Promise(chained_promise, _name='%s -> %s' % (source_name, name))

    def catch(self, on_rejected):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable): Will be called with the rejection reason
                if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def __repr__(self):
        if self._state == self.REJECTED:
            state = 'R'
        elif self._state == self.FULFILLED:
            state = 'F'
        else:
            state = 'P'
        return 'Promise(%s %s)' % (self._name, state)

    @classmethod
    def resolve(cls, value):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a promise, the new Promise
                adopts its state once settled.
        Returns:
            Promise: new Promise containing the value passed in parameter.
        """
        def executor(ok, error):
            if is_promise(value):
                value.then(ok, error)
            else:
                ok(value)

        return cls(executor, _name='RESOLVE')

    @classmethod
    def reject(cls, reason):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: rejection reason, usually an Exception.
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda ok, error: error(reason), _name='REJECT')

    @classmethod
    def resolve_delay(cls, value, delay):
        """Create a promise who resolves the selected value after a delay.

        Args:
            value: result of the promise. If it's a promise, the new Promise
                adopts its state, once the delay is elapsed.
            delay (float): minimum delay before resolution, in seconds.
        Returns:
            Promise: new Promise.
        """
        def executor(ok, error):
            def settle():
                if is_promise(value):
                    value.then(ok, error)
                else:
                    ok(value)

            get_scheduler().schedule(settle, delay)

        return cls(executor, _name='RESOLVE_DELAY')

    @classmethod
    def reject_delay(cls, reason, delay):
        """Create a Promise rejected for the reason specified after a delay.

        Args:
            reason: rejection reason, usually an Exception.
            delay (float): minimum delay before rejection, in seconds.
        Returns:
            Promise: new Promise.
        """
        def executor(ok, error):
            get_scheduler().schedule(error, delay, reason)

        return cls(executor, _name='REJECT_DELAY')

    @classmethod
    def all(cls, items):
        """Create a Promise who wait a list of promises to be all fulfilled.

        The resulting Promise resolve when all of the promises in the list are
        resolved, and returns a list of all the resulting values, keeping the
        order of the promise list.
        If a promise is rejected, then the resulting promise is rejected with
        the same reason, and all results from other promises are ignored.

        Args:
            items (iterable): promises, or values (who are considered as
                already fulfilled promises).
        Returns:
            Promise<list>: resulting promise, fulfilled when all promises
                are fulfilled, or rejected when one of the promises has been
                rejected.
        """
        promises = [cls.resolve(item) for item in items]
        if not promises:
            return cls.resolve([])

        results = [None] * len(promises)
        remaining = [len(promises)]

        def executor(resolve, reject):
            def resolve_one_promise(index, value):
                results[index] = value
                remaining[0] -= 1
                if remaining[0] == 0:
                    resolve(list(results))

            for index, p in enumerate(promises):
                p.then(partial(resolve_one_promise, index), reject)

        return cls(executor, _name='ALL')

    @classmethod
    def race(cls, items):
        """Resolve or reject with the fastest Promise.

        Returns a new Promise, settled as soon as one of the promises given
        in argument is settled. Result value or rejection reason of the
        finished promise are transmitted. All other Promise results are
        ignored.

        If the list is empty, the returned Promise is never settled.

        Args:
            items (iterable): promises, or values (who are considered as
                already fulfilled promises).
        Returns:
            Promise: a promise
        """
        promises = [cls.resolve(item) for item in items]

        def executor(resolve, reject):
            for p in promises:
                p.then(resolve, reject)

        return cls(executor, _name='RACE')
