import sys

import pytest
from loguru import logger

from abi_forms.core.config import CONFIG, set_config


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "/tests/" in item.nodeid:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def _isolated_config():
    saved = dict(CONFIG)
    set_config({})
    yield
    set_config(saved)


@pytest.fixture
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")
