# -*- coding: utf-8 -*-

from .errors import PromiseRejected


def as_exception(reason):
    """Convert a rejection reason into something who can be raised.

    Only instances of `Exception` are raised as is. Other values, including
    `BaseException` instances like `KeyboardInterrupt()`, are wrapped: they
    must not escape the callbacks and stop the scheduler.

    Args:
        reason: rejection reason of a Promise. Can be any value.
    Returns:
        Exception: `reason` itself if it's an `Exception` instance; otherwise
            a `PromiseRejected` wrapping it.
    """
    if isinstance(reason, Exception):
        return reason
    return PromiseRejected(reason)


def unwrap_error(error):
    """Find the rejection reason corresponding to a raised exception.

    This is the reverse of `as_exception()`: a `PromiseRejected` is replaced
    by the reason it carries. Any other exception is the reason.
    """
    if isinstance(error, PromiseRejected):
        return error.reason
    return error
