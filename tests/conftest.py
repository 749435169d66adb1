"""Pytest configuration and fixtures for scengrid tests."""

import logging

import pytest

from scengrid import CellKey
from tests.helpers.factories import make_scenario


@pytest.fixture
def s1():
    return make_scenario("parallel_up", shift=0.0001)


@pytest.fixture
def s2():
    return make_scenario("parallel_down", shift=-0.0001)


@pytest.fixture
def s3():
    return make_scenario("fx_spot_up", shift=0.01, market_data_id="EUR/USD")


@pytest.fixture
def origin() -> CellKey:
    return CellKey(0, 0)


@pytest.fixture
def restore_log_levels():
    """
    Save scengrid logger levels and restore them after the test.

    Request explicitly from tests that call ``load_config`` with custom
    logging so levels do not leak into other tests.
    """
    names = ["scengrid", "scengrid.core.builder", "scengrid.core.registry"]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
