# -*- coding: utf-8 -*-

import functools

from .promise import Promise
from .util import unwrap_error


def wrap_promise(f):
    """Decorator who converts the result in a Promise object.

    If the function decorated returns a Promise, the new Promise adopts its
    state. Else, a new Promise is created with the returned value as result.
    If the function raises an exception, a rejected Promise is returned.
    """
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return Promise.resolve(f(*args, **kwargs))
        except Exception as error:
            return Promise.reject(unwrap_error(error))

    return wrapper
