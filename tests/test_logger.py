"""
Unit Tests for Logging Setup

Author: photoutils Project
License: MIT
"""

import io
import json
import logging
import pytest

from photoutils.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_handlers():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestLogging:
    """Test suite for setup_logging and get_logger."""

    def test_module_loggers_are_children(self):
        """Test that every module logger lives under photoutils."""
        assert get_logger("photoutils.core.sync_engine").name == "photoutils.core.sync_engine"
        assert get_logger("plugin").name == "photoutils.plugin"
        assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME

    def test_plain_text_on_non_terminal(self):
        """Test level filtering and uncolored output on a plain stream."""
        stream = io.StringIO()
        setup_logging("WARNING", stream=stream)

        get_logger("test").info("hidden")
        get_logger("test").warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "WARNING - photoutils.test - shown" in output
        assert "\033[" not in output

    def test_json_records(self):
        """Test JSON console output."""
        stream = io.StringIO()
        setup_logging("INFO", json_format=True, stream=stream)

        get_logger("test").info("copied")

        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert records[-1]["message"] == "copied"
        assert records[-1]["levelname"] == "INFO"

    def test_file_logging(self, tmp_path):
        """Test that a rotating file handler is added on request."""
        log_file = tmp_path / "logs" / "photoutils.log"
        logger = setup_logging("DEBUG", log_to_file=True, log_file_path=str(log_file), stream=io.StringIO())

        get_logger("test").error("broken")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "broken" in content
        assert "MainThread" in content

    def test_repeated_setup_replaces_handlers(self):
        """Test that handlers do not accumulate."""
        setup_logging(stream=io.StringIO())
        logger = setup_logging(stream=io.StringIO())

        assert len(logger.handlers) == 1
        assert logger.propagate is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
