# -*- coding: utf-8 -*-

import pytest

from eventual.scheduler import Scheduler, set_scheduler


@pytest.fixture(autouse=True)
def scheduler(request):
    """Install a new default Scheduler, for the duration of the test.

    Returns:
        Scheduler: the scheduler used by all Promises created by the test.
    """
    s = Scheduler()
    set_scheduler(s)
    request.addfinalizer(lambda: set_scheduler(None))
    return s
