from __future__ import annotations

import logging

import pytest

from rwc.common.logging_setup import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_rwc_logger():
    """Each test starts with an unconfigured 'rwc' logger."""
    logger = logging.getLogger(LOGGER_NAME)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
