# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa

import logging

from .common import config
from .common import log
from .promise import Promise


def main():
    """Entry point of the `eventual` command: a short demonstration."""

    with log.Context(filename=None):
        config.load()
        log.set_debug_mode(config.get('debug_mode'))
        log.set_logs_level(config.get('log_levels'))

        logger = logging.getLogger(__name__)
        logger.info('eventual %s', __version__)

        demos = [
            ('then', Promise(lambda ok, error: ok(1)).then(lambda v: v + 1)),
            ('catch', Promise.reject('boom').catch(len)),
            ('all', Promise.all([1, Promise.resolve(2),
                                 Promise.resolve_delay(3, 0.02)])),
            ('race', Promise.race([Promise.resolve_delay('slow', 0.05),
                                   Promise.resolve_delay('fast', 0.01)])),
            ('rejected all', Promise.all([1, Promise.reject('x')])),
        ]

        for name, p in demos:
            reason = p.exception(1)
            if reason is None:
                logger.info('%s: fulfilled with %r', name, p.result())
            else:
                logger.info('%s: rejected with %r', name, reason)


if __name__ == "__main__":
    main()
