import logging

import pytest

from mdchunk.core.log import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo handlers/levels that CLI runs install on the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
