"""
Tests for logging configuration module.
"""

import pytest
import logging
from io import StringIO

from itcoptics.core.logging_config import LOG_LEVELS, setup_logging, get_logger


def test_setup_logging_default():
    """Test setting up logging with default parameters."""
    stream = StringIO()
    setup_logging(level="INFO", stream=stream)

    logger = logging.getLogger("itcoptics.test")
    logger.info("Test message")

    output = stream.getvalue()
    assert "Test message" in output
    assert "INFO" in output


def test_setup_logging_custom_level():
    """Test setting up logging with custom level."""
    stream = StringIO()
    setup_logging(level="DEBUG", stream=stream)

    logger = logging.getLogger("itcoptics.test")
    logger.debug("Debug message")

    assert "Debug message" in stream.getvalue()


def test_setup_logging_filters_below_level():
    """Test messages below the configured level are dropped."""
    stream = StringIO()
    setup_logging(level="WARNING", stream=stream)

    get_logger("test").info("Quiet message")
    assert "Quiet message" not in stream.getvalue()


def test_setup_logging_custom_format():
    """Test setting up logging with custom format."""
    stream = StringIO()
    custom_format = "%(levelname)s - %(message)s"
    setup_logging(level="INFO", format_string=custom_format, stream=stream)

    logger = logging.getLogger("itcoptics.test")
    logger.info("Test message")

    assert "INFO - Test message" in stream.getvalue()


def test_setup_logging_level_is_case_insensitive():
    """Test lower-case level names are accepted."""
    stream = StringIO()
    setup_logging(level="debug", stream=stream)
    get_logger("test").debug("Lower-case level")
    assert "Lower-case level" in stream.getvalue()


def test_setup_logging_unknown_level():
    """Test an unknown level name is rejected."""
    with pytest.raises(ValueError, match="Unknown log level: VERBOSE"):
        setup_logging(level="VERBOSE")


def test_cli_log_level_choices(temp_config_file, capsys):
    """Test the CLI accepts every level name in either case."""
    from itcoptics.cli.main import main

    for level in LOG_LEVELS:
        main(["--log-level", level.lower(), "coverage", str(temp_config_file)])
    assert "Namespace:          gratings" in capsys.readouterr().out


def test_get_logger():
    """Test getting a logger instance."""
    logger = get_logger("test.module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "itcoptics.test.module"


def test_optics_construction_is_logged(memory_source, caplog):
    """Test building optics logs the resolved setup."""
    from itcoptics.detector import GMOS_HAMAMATSU
    from itcoptics.instrument.gmos import GmosGratingOptics

    with caplog.at_level(logging.INFO, logger="itcoptics"):
        GmosGratingOptics("B1200_G5301", GMOS_HAMAMATSU, 500.0, 6144, 2, memory_source)

    assert "GmosGratingOptics(grating='B1200_G5301'" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
