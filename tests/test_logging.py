"""Tests for logging configuration."""

import sys
from io import StringIO
from unittest.mock import patch

from captrix.logging import configure_logging, logger, route_context


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_verbose_false_filters_debug(self) -> None:
        """Non-verbose mode filters DEBUG messages."""
        configure_logging(verbose=False)

        stderr = StringIO()
        with patch.object(sys, "stderr", stderr):
            # Reconfigure to use our mock stderr
            configure_logging(verbose=False)
            logger.debug("debug message")
            logger.warning("warning message")

        output = stderr.getvalue()
        assert "debug message" not in output
        assert "warning message" in output

    def test_verbose_true_shows_debug(self) -> None:
        """Verbose mode shows DEBUG messages."""
        stderr = StringIO()
        with patch.object(sys, "stderr", stderr):
            configure_logging(verbose=True)
            logger.debug("debug message")

        output = stderr.getvalue()
        assert "debug message" in output

    def test_verbose_true_shows_timestamps(self) -> None:
        """Verbose mode includes timestamps in format."""
        stderr = StringIO()
        with patch.object(sys, "stderr", stderr):
            configure_logging(verbose=True)
            logger.info("test message")

        output = stderr.getvalue()
        # Timestamp format is HH:mm:ss, so expect colons
        assert ":" in output

    def test_logger_exported(self) -> None:
        """Logger is accessible from module."""
        from captrix.logging import logger as imported_logger

        assert imported_logger is not None
        assert hasattr(imported_logger, "debug")
        assert hasattr(imported_logger, "info")
        assert hasattr(imported_logger, "warning")
        assert hasattr(imported_logger, "error")

    def test_verbose_true_shows_module_name(self) -> None:
        """Verbose mode names the module that logged."""
        stderr = StringIO()
        with patch.object(sys, "stderr", stderr):
            configure_logging(verbose=True)
            logger.info("route message")

        assert "test_logging" in stderr.getvalue()

    def test_non_verbose_is_compact(self) -> None:
        """Non-verbose mode shows only level and message."""
        stderr = StringIO()
        with patch.object(sys, "stderr", stderr):
            configure_logging(verbose=False)
            logger.info("plain message")

        assert stderr.getvalue().strip() == "INFO    | plain message"

    def test_verbose_shows_route_name(self) -> None:
        """Messages inside a route context are tagged with the route in verbose mode."""
        stderr = StringIO()
        with patch.object(sys, "stderr", stderr):
            configure_logging(verbose=True)
            with route_context("corsproxy"):
                logger.debug("inside")
            logger.debug("outside")

        lines = stderr.getvalue().splitlines()
        assert "| corsproxy | inside" in lines[0]
        assert "corsproxy" not in lines[1]

    def test_non_verbose_omits_route_name(self) -> None:
        stderr = StringIO()
        with patch.object(sys, "stderr", stderr):
            configure_logging(verbose=False)
            with route_context("corsproxy"):
                logger.info("inside")

        assert stderr.getvalue().strip() == "INFO    | inside"
