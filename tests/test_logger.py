"""Tests for logging setup."""

import logging

import pytest

from logger import LOGGER_NAME, get_log_file_path, get_logger, setup_logging


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def reset_handlers(self):
        yield
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.close()
        logging.getLogger(LOGGER_NAME).handlers.clear()

    def test_creates_dated_log_file(self, test_config):
        logger = setup_logging(test_config, console=False)
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        log_file = get_log_file_path(test_config)
        assert log_file.exists()
        assert "hello" in log_file.read_text()
        assert log_file.name.startswith("folio-")

    def test_repeated_setup_does_not_duplicate_handlers(self, test_config):
        setup_logging(test_config)
        logger = setup_logging(test_config)

        assert len(logger.handlers) == 2

    def test_child_loggers_share_hierarchy(self):
        assert get_logger().name == LOGGER_NAME
        assert get_logger("categories").name == f"{LOGGER_NAME}.categories"
        assert get_logger("categories").parent is logging.getLogger(LOGGER_NAME)
