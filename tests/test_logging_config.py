import logging

import pytest

from app.core.config import Settings
from app.core.logging_config import QUIET_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def restore_levels():
    names = ("", *QUIET_LOGGERS)
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_third_party_loggers_default_to_warning():
    configure_logging(Settings(log_level="INFO"))

    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_stricter_root_level_applies_to_third_party_loggers():
    configure_logging(Settings(log_level="ERROR"))

    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR
        assert not logging.getLogger(name).isEnabledFor(logging.WARNING)
