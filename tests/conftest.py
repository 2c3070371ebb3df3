"""Pytest configuration for the semtype test suite."""

import pytest

from semtype.storage import StaticEngineLookup


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "concurrency: marks tests that exercise the classifiers from many threads"
    )


@pytest.fixture
def engines():
    """Fake catalog: data source id -> engine."""
    return StaticEngineLookup({
        1: 'postgres',
        2: 'googleanalytics',
        3: 'druid',
        4: 'Druid',
        5: 'mongo',
    })
