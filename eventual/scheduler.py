# -*- coding: utf-8 -*-

"""Deferred execution of callbacks.

The Promises never execute a callback synchronously: it's submitted to a
`Scheduler`, who runs it later, after the current task. The scheduler doesn't
own a thread: tasks are executed by the thread who drives it, by calling
`run()` or `run_until()` (as `Promise.result()` does).

Callbacks can be submitted from any thread.
"""

import heapq
import itertools
import logging
import threading
import time

from .common import config

_logger = logging.getLogger(__name__)


class Scheduler(object):
    """Ordered queue of callbacks, executed after an optional delay.

    Callbacks are executed one at a time, by order of due time. Callbacks
    having the same due time are executed by order of submission. As the
    clock never goes backward, two callbacks submitted with the same delay are
    always executed in the order they have been submitted.

    Attributes:
        min_delay (float): minimal delay applied to all callbacks, in seconds.
            When set, it emulates the granularity of a timer-based scheduler.
    """

    def __init__(self, min_delay=0, clock=time.monotonic):
        """
        Args:
            min_delay (float, optional): minimal delay of all callbacks, in
                seconds. Default to 0.
            clock (callable, optional): returns the current time, in seconds.
                Default to `time.monotonic`.
        """
        self.min_delay = min_delay
        self._clock = clock
        self._condition = threading.Condition()
        self._tasks = []
        self._counter = itertools.count()
        self._owner = None

    @classmethod
    def from_config(cls):
        """Create a scheduler using the config entries."""
        return cls(min_delay=config.get('scheduler_min_delay'))

    def schedule(self, callback, delay=0, *args):
        """Submit a callback to be executed later.

        Args:
            callback (callable): function to execute.
            delay (float, optional): minimum time to wait before the
                execution, in seconds.
            *args: arguments passed to the callback.
        """
        with self._condition:
            due = self._clock() + max(delay, self.min_delay)
            heapq.heappush(self._tasks,
                           (due, next(self._counter), callback, args))
            self._condition.notify_all()

    def wakeup(self):
        """Wake up the threads waiting for this scheduler.

        They will check again their stop condition.
        """
        with self._condition:
            self._condition.notify_all()

    def __len__(self):
        with self._condition:
            return len(self._tasks)

    def run(self, timeout=None):
        """Execute the tasks until there is no more.

        Tasks submitted during the run are also executed. If some tasks are
        delayed, the call blocks until they're due.

        Args:
            timeout (float, optional): if set, maximum time to run, in
                seconds.
        Returns:
            boolean: True if all tasks have been executed; False if there are
                remaining tasks.
        """
        return self.run_until(lambda: not self._tasks, timeout)

    def run_until(self, predicate, timeout=None):
        """Execute the tasks until a condition is met.

        The predicate is checked before each task. When no task is due, the
        call blocks until the next task is due, or until the scheduler is
        woken up (by `wakeup()` or a new submission).

        If another thread is already running the scheduler, this call doesn't
        execute any task: it waits until the predicate is true.

        Args:
            predicate (callable): returns True when the run should stop. It
                must be cheap and must not acquire locks.
            timeout (float, optional): if set, maximum time to run, in
                seconds. By default, it can wait indefinitely.
        Returns:
            boolean: the last value of `predicate()`.
        Raises:
            RuntimeError: if called from a task executed by this scheduler.
        """
        deadline = None if timeout is None else self._clock() + timeout
        current = threading.current_thread()

        with self._condition:
            if self._owner is current:
                raise RuntimeError('A Scheduler cannot be run from one of '
                                   'its own tasks.')
            while self._owner is not None:
                if predicate():
                    return True
                if not self._wait(deadline):
                    return predicate()
            self._owner = current

        try:
            while True:
                task = self._next_task(predicate, deadline)
                if task is None:
                    return predicate()
                self._execute(task)
        finally:
            with self._condition:
                self._owner = None
                self._condition.notify_all()

    def _wait(self, deadline, next_due=None):
        """Wait on the condition until `deadline` or `next_due`.

        Must be called with the condition acquired.

        Returns:
            boolean: False if the deadline is already reached.
        """
        now = self._clock()
        if deadline is not None and now >= deadline:
            return False
        limits = [t - now for t in (deadline, next_due) if t is not None]
        self._condition.wait(min(limits) if limits else None)
        return True

    def _next_task(self, predicate, deadline):
        """Pop the next due task, waiting for it if necessary.

        Returns:
            tuple: the task; None if the predicate is true or if the deadline
                is reached.
        """
        with self._condition:
            while True:
                if predicate():
                    return None
                next_due = self._tasks[0][0] if self._tasks else None
                if next_due is not None and next_due <= self._clock():
                    return heapq.heappop(self._tasks)
                if not self._wait(deadline, next_due):
                    return None

    @staticmethod
    def _execute(task):
        _due, _seq, callback, args = task
        try:
            callback(*args)
        except Exception:
            _logger.exception('Scheduled task %r has raised an exception',
                              callback)


_default_scheduler = None
_default_lock = threading.Lock()


def get_scheduler():
    """Returns the default Scheduler, used by all Promises.

    It's created at first use, from the config.
    """
    global _default_scheduler

    with _default_lock:
        if _default_scheduler is None:
            _default_scheduler = Scheduler.from_config()
            _logger.debug('Default scheduler created (min delay: %s)',
                          _default_scheduler.min_delay)
        return _default_scheduler


def set_scheduler(scheduler):
    """Replace the default Scheduler.

    Promises already created keep the scheduler they were created with.

    Args:
        scheduler (Scheduler): new default scheduler. If None, a new one will
            be created from the config at the next use.
    """
    global _default_scheduler

    with _default_lock:
        _default_scheduler = scheduler
