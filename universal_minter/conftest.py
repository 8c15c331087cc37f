import copy

import pytest

import universal_minter.core.config as config

pytest_plugins = ["universal_minter.testing.fake_chain"]


@pytest.fixture
def restore_global_config():
    """Snapshot the module-level CONFIG and put it back after the test."""
    original = copy.deepcopy(config.CONFIG)
    yield
    config.set_config(original)
