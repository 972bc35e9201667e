import logging

import pytest

from scouting import create_app
from scouting.storage import EntityStore


@pytest.fixture
def package_logger():
    logger = logging.getLogger("scouting")
    saved = logger.level
    yield logger
    logger.setLevel(saved)


def test_unknown_log_level_falls_back_to_info(monkeypatch, package_logger):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    app = create_app(store=EntityStore(), seed=False)
    assert app.logger.level == logging.INFO
    assert package_logger.level == logging.INFO


def test_log_level_reaches_storage_logger(monkeypatch, package_logger):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    create_app(store=EntityStore(), seed=False)
    assert logging.getLogger("scouting.storage").getEffectiveLevel() == logging.DEBUG


def test_log_level_defaults_to_info(monkeypatch, package_logger):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    app = create_app(store=EntityStore(), seed=False)
    assert app.logger.level == logging.INFO
