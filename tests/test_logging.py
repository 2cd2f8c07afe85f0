import logging

import pytest
import structlog

from menugrid.utils.logging import configure_logging


@pytest.fixture
def clean_root_logger():
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
    structlog.reset_defaults()


def test_configure_logging_installs_structlog_formatter(clean_root_logger):
    configure_logging(level='WARNING', json=True, force=True)

    assert clean_root_logger.level == logging.WARNING
    assert len(clean_root_logger.handlers) == 1
    assert isinstance(clean_root_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


def test_configure_logging_keeps_existing_handlers(clean_root_logger):
    existing = logging.NullHandler()
    clean_root_logger.handlers[:] = [existing]

    configure_logging(level=logging.DEBUG)

    assert clean_root_logger.handlers == [existing]
