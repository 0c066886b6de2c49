"""Tests for command line logging setup."""

import io
import logging

import pytest

from histolog.adapters.logging import LOGGER_NAME, configure_logging, reset_logging


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.adapters
    @pytest.mark.parametrize(
        ("verbosity", "quiet", "level"),
        [
            (0, False, logging.WARNING),
            (1, False, logging.INFO),
            (2, False, logging.DEBUG),
            (5, False, logging.DEBUG),
            (2, True, logging.ERROR),
        ],
    )
    def test_levels(self, verbosity: int, quiet: bool, level: int) -> None:
        """-v raises verbosity, -q only keeps errors."""
        logger = configure_logging(verbosity, quiet, stream=io.StringIO())
        assert logger.level == level

    @pytest.mark.adapters
    def test_writes_formatted_records(self) -> None:
        """Records are written as ``LEVEL name: message``."""
        stream = io.StringIO()
        configure_logging(stream=stream)
        logging.getLogger("histolog.core.intervals").warning("not matched")
        assert stream.getvalue() == "WARNING histolog.core.intervals: not matched\n"

    @pytest.mark.adapters
    def test_quiet_hides_warnings(self) -> None:
        """Warnings are dropped in quiet mode."""
        stream = io.StringIO()
        configure_logging(quiet=True, stream=stream)
        logging.getLogger(LOGGER_NAME).warning("not matched")
        assert stream.getvalue() == ""

    @pytest.mark.adapters
    def test_repeated_calls_keep_one_handler(self) -> None:
        """Reconfiguring replaces the previous handler."""
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1

    @pytest.mark.adapters
    def test_reset_removes_handler(self) -> None:
        """reset_logging() undoes configure_logging()."""
        logger = configure_logging(stream=io.StringIO())
        reset_logging()
        assert logger.handlers == []
        assert logger.level == logging.NOTSET
