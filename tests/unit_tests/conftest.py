# -*- coding: utf-8 -*-

import pytest
from vow.common import config
from vow.deferred import set_consume_thrown_exceptions


def _reset_settings():
    config.reset()
    set_consume_thrown_exceptions(False)


@pytest.fixture(autouse=True)
def clean_config(request):
    """Start each test with the default settings, and no config file.

    Settings are process-wide; a test enabling an option must not leak it
    into the following tests.
    """
    _reset_settings()
    request.addfinalizer(_reset_settings)
