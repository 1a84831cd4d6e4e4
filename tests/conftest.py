"""Shared test fixtures for ssl-binder."""

import pytest

import ssl_binder.auth as _auth
from ssl_binder.config import AppConfig


def pytest_runtest_setup(item):
    """Reset the module-level credential cache between tests."""
    _auth._credential = None


@pytest.fixture
def config(tmp_path):
    return AppConfig(subscription_id="sub-123", scratch_dir=str(tmp_path))
