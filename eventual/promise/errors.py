# -*- coding: utf-8 -*-


class TimeoutError(Exception):
    """An operation could not be executed within the time allowed."""
    pass


class PromiseRejected(Exception):
    """Carry a rejection reason who is not an exception.

    Python can only raise exceptions, but a Promise can be rejected with any
    value. Raising `PromiseRejected(reason)` from an executor or a callback
    rejects the Promise with `reason` itself, not with this wrapper.
    It's also the exception raised by `Promise.result()` when the reason is
    not an exception.

    Attributes:
        reason: the rejection reason.
    """

    def __init__(self, reason):
        Exception.__init__(self, reason)
        self.reason = reason
