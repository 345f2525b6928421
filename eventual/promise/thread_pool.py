# -*- coding: utf-8 -*-

from concurrent.futures import ThreadPoolExecutor as Executor
import logging

from .deferred import Deferred

_logger = logging.getLogger(__name__)


class ThreadPoolExecutor(object):
    """Execute callables asynchronously on demand, in another threads.

    The callables run in worker threads, but the Promise callbacks are always
    executed by the thread driving the scheduler.
    """

    def __init__(self, max_workers):
        """Initialize the thread pool

        Args:
            max_workers: The maximum number of threads that can be used to
                execute the given calls.
        """
        self._executor = Executor(max_workers)

    def submit(self, callback, *args, **kwargs):
        """Schedule the callable to be executed and return a Promise.

        Args:
            callback (callable): callback who will run in another thread.
            *args: argument passed to callback.
            **kwargs: keywords arguments passed to callback.
        Returns:
            Promise: Promise who resolve after the callback has been executed.
                It's fulfilled with the value returned by the callback.
                If the callback raise an exception, the promise is rejected
                with this exception.
        """
        df = Deferred(_name=getattr(callback, '__name__', None))

        def on_future_done(f):
            error = f.exception()
            if error is None:
                df.resolve(f.result())
            else:
                df.reject(error)

        f = self._executor.submit(callback, *args, **kwargs)
        f.add_done_callback(on_future_done)

        return df.promise

    def shutdown(self, wait=True):
        """Stop the pool. Tasks already submitted are still executed.

        Args:
            wait (boolean, optional): if True, block until all workers are
                done. Default to True.
        """
        _logger.debug('Shutdown thread pool executor')
        self._executor.shutdown(wait)

    def __enter__(self):
        return self

    def __exit__(self, _type, _value, _tb):
        self.shutdown()
