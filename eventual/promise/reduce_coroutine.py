# -*- coding: utf-8 -*-

import functools

from .deferred import Deferred
from .promise import is_promise
from .util import as_exception, unwrap_error


def reduce_coroutine(func):
    """Decorator who converts a coroutine of promises into a single promise.

    The greatest interest is the ability to write a function in an
    synchronous-like style, using many asynchronous Promises.
    Whatever is the number of Promises or async calls used, the result will
    always be an unique Promise wrapping the whole process.

    Each yielded Promise is waited: its result is sent back to the generator,
    or its rejection reason is raised inside the generator. The first yielded
    value who is not a Promise ends the coroutine.
    The resulting promise is fulfilled with the value returned by the
    generator, or, if it returns None, with the last value yielded.

    Example:

        >>> @reduce_coroutine
        ... def add_remote_values():
        ...     a = yield fetch_a()
        ...     b = yield fetch_b()
        ...     return a + b
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        """
        Args:
            *args
            **kwargs
        Returns:
            Promise<*>
        """
        df = Deferred(_name='COROUTINE %s' % func.__name__)

        try:
            # Create generator; Initialization phase
            gen = func(*args, **kwargs)
        except Exception as error:
            df.reject(unwrap_error(error))
            return df.promise

        def _call_next_or_set_result(value):
            if is_promise(value):
                value.then(iter_next, iter_error)
            else:
                gen.close()
                df.resolve(value)

        def _resolve_with_return_value(stop, last_value):
            if stop.value is not None:
                df.resolve(stop.value)
            else:
                df.resolve(last_value)

        def iter_next(yielded_value):
            try:
                next_value = gen.send(yielded_value)
            except StopIteration as stop:
                return _resolve_with_return_value(stop, yielded_value)
            except Exception as error:
                return df.reject(unwrap_error(error))
            _call_next_or_set_result(next_value)

        def iter_error(reason):
            try:
                next_value = gen.throw(as_exception(reason))
            except StopIteration as stop:
                return _resolve_with_return_value(stop, None)
            except Exception as error:
                return df.reject(unwrap_error(error))
            _call_next_or_set_result(next_value)

        # Start and resolve loop.
        try:
            first_value = next(gen)
        except StopIteration as stop:
            df.resolve(stop.value)
            return df.promise
        except Exception as error:
            df.reject(unwrap_error(error))
            return df.promise
        _call_next_or_set_result(first_value)

        return df.promise

    return wrapper
