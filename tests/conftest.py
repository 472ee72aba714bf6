import logging

import pytest

EXPORTER_ENV = ("IN_CLUSTER", "CURRENT_NODE_NAME", "SCRAPE_INTERVAL", "METRICS_PORT", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Start every test from the default configuration."""
    for name in EXPORTER_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_log_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
