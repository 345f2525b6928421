# -*- coding: utf-8 -*-

from eventual import promise


class TestReduceCoroutine(object):

    def test_reduce_two_promises_coroutine(self):
        """Use @reduce_coroutine on a generator of two fulfilled promises.

        The most common Promise-generator case: a generator who yield two
        promises. the decorated coroutine must return a Promise who resolves
        when the generator is over.

        The last promise yielded contains the "result" value.
        """

        @promise.reduce_coroutine
        def generator():
            first_value = yield promise.Promise.resolve(1)
            assert first_value
            yield promise.Promise.resolve(2)

        p = generator()
        assert isinstance(p, promise.Promise)
        assert p.result(0.1) == 2

    def test_reduce_direct_value_coroutine(self):
        """Use @reduce_coroutine on a generator yielding non-future result.

        The last value yielded by the generator is the "return" value. In this
        scenario, it's yielded without being wrapped in a Promise.
        """

        @promise.reduce_coroutine
        def generator():
            first_value = yield promise.Promise.resolve(1)
            assert first_value
            second_value = yield promise.Promise.resolve(2)
            assert second_value == 2
            yield 3

        p = generator()
        assert isinstance(p, promise.Promise)
        assert p.result(0.1) == 3

    def test_reduce_coroutine_with_return_value(self):
        @promise.reduce_coroutine
        def generator(x):
            a = yield promise.Promise.resolve(x)
            b = yield promise.Promise.resolve_delay(x * 10, 0.001)
            return a + b

        assert generator(2).result(1) == 22

    def test_reduce_coroutine_with_failed_promise(self):
        """Use @reduce_coroutine on a generator who yield rejected Promise

        If not caught (like in this case), the error is transmitted to the
        Promise p.
        """
        class Err(Exception):
            pass

        @promise.reduce_coroutine
        def generator():
            first_value = yield promise.Promise.resolve(1)
            assert first_value
            yield promise.Promise.reject(Err())

        p = generator()
        assert isinstance(p, promise.Promise)
        err = p.exception(0.1)
        assert isinstance(err, Err)

    def test_reduce_coroutine_with_non_exception_rejection(self):
        @promise.reduce_coroutine
        def generator():
            yield promise.Promise.reject('reason')

        assert generator().exception(0.1) == 'reason'

    def test_reduce_coroutine_raising_exception(self):
        """Use @reduce_coroutine on a generator who raise an Exception."""
        class Err(Exception):
            pass

        @promise.reduce_coroutine
        def generator():
            first_value = yield promise.Promise.resolve(1)
            assert first_value
            raise Err()

        p = generator()
        assert isinstance(p, promise.Promise)
        assert isinstance(p.exception(0.1), Err)

    def test_reduce_coroutine_catching_error(self):
        """The generator catches the error of a rejected Promise."""
        class Err(Exception):
            pass

        @promise.reduce_coroutine
        def generator():
            try:
                yield promise.Promise.reject(Err())
            except Err:
                value = yield promise.Promise.resolve('recovered')
            yield value

        assert generator().result(0.1) == 'recovered'

    def test_reduce_empty_generator(self):
        @promise.reduce_coroutine
        def generator():
            return
            yield

        assert generator().result(0.1) is None

    def test_reduce_coroutine_raising_before_first_yield(self):
        @promise.reduce_coroutine
        def generator():
            raise ValueError()
            yield

        assert isinstance(generator().exception(0.1), ValueError)

    def test_reduce_coroutine_with_thenable_object(self):
        """Objects with a then() method are values, not promises."""
        class Thenable(object):
            def then(self, ok, error):
                ok(1)

        value = Thenable()

        @promise.reduce_coroutine
        def generator():
            yield value

        assert generator().result(0.1) is value
