"""Pytest configuration.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so `tests.unit...` helpers import.
"""

import pytest

from clean_test_linter.infrastructure.di.container import CleanTestContainer


@pytest.fixture(autouse=True)
def _fresh_container():
    """The container caches configuration read from the CWD; never leak it across tests."""
    CleanTestContainer.reset()
    yield
    CleanTestContainer.reset()
