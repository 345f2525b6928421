# -*- coding: utf-8 -*-

import pytest
import threading

from eventual.promise import Deferred, Promise, TimeoutError


class TestDeferred(object):

    def test_deferred_resolve_promise(self):
        df = Deferred()
        assert isinstance(df.promise, Promise)

        with pytest.raises(TimeoutError):
            df.promise.result(0.001)
        df.resolve('Value')
        assert df.promise.result(0.001) == 'Value'

    def test_deferred_reject_promise(self):
        class MyException(Exception):
            pass

        df = Deferred()
        with pytest.raises(TimeoutError):
            df.promise.result(0.001)
        df.reject(MyException())

        with pytest.raises(MyException):
            df.promise.result(0.001)

    def test_deferred_settled_only_once(self):
        df = Deferred()
        df.reject('error')
        df.resolve('Value')
        assert df.promise.exception(0.001) == 'error'

    def test_deferred_custom_name(self):
        df = Deferred(_name='MY_TASK')
        assert repr(df.promise) == 'Promise(MY_TASK P)'

    def test_deferred_repr(self):
        df = Deferred()
        assert repr(df) == 'Deferred(Promise(DEFERRED P))'
        df.resolve(1)
        assert repr(df) == 'Deferred(Promise(DEFERRED F))'

    def test_deferred_resolved_from_other_thread(self):
        df = Deferred()
        p = df.promise.then(lambda value: value * 2)

        threading.Timer(0.001, df.resolve, args=[21]).start()
        assert p.result(1) == 42
