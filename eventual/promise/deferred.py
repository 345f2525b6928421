# -*- coding: utf-8 -*-

from .promise import Promise


class Deferred(object):
    """Creator side of an asynchronous task.

    A Deferred is the "creator" side of an async task, whereas a Promise
    represents the asynchronous value from the "consumer" side. It's useful
    when the code who settles the Promise is not the code who creates it,
    like a worker thread or a coroutine driver.

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
    """

    def __init__(self, _name=None):
        """
        Args:
            _name (str, optional): name of the promise, used when converted
                to text. Default to 'DEFERRED'.
        """
        capabilities = []

        def executor(ok, error):
            capabilities.extend([ok, error])

        self.promise = Promise(executor, _name=_name or 'DEFERRED')
        self._resolve, self._reject = capabilities

    def resolve(self, value):
        """Fulfill the promise. Ignored if the promise is already settled."""
        self._resolve(value)

    def reject(self, reason):
        """Reject the promise. Ignored if the promise is already settled."""
        self._reject(reason)

    def __repr__(self):
        return 'Deferred(%r)' % self.promise
