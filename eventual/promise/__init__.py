# -*- coding: utf-8 -*-

from .decorators import wrap_promise
from .deferred import Deferred
from .errors import PromiseRejected, TimeoutError
from .promise import Promise, is_promise
from .reduce_coroutine import reduce_coroutine
from .thread_pool import ThreadPoolExecutor

__all__ = ['is_promise', 'Deferred', 'Promise', 'PromiseRejected',
           'TimeoutError', 'reduce_coroutine', 'ThreadPoolExecutor',
           'wrap_promise']
