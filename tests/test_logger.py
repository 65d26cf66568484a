"""Tests for logger functionality."""

import logging


def test_logger_set_level():
    """Test setting log level via string."""
    from optiband import logger

    logger.set_log_level("DEBUG")
    assert logger.logger.level == 10
    logger.set_log_level("INFO")
    assert logger.logger.level == 20


def test_logger_set_level_int():
    from optiband import logger

    logger.set_log_level(logging.WARNING)
    assert logger.logger.level == logging.WARNING
    logger.set_log_level(logging.INFO)


def test_get_logger_adds_single_handler():
    from optiband.logger import ColorFormatter, get_logger

    log = get_logger("optiband")
    get_logger("optiband")

    assert len(log.handlers) == 1
    assert isinstance(log.handlers[0].formatter, ColorFormatter)


def test_color_formatter_wraps_message():
    from optiband.logger import ColorFormatter

    record = logging.LogRecord(
        "optiband", logging.WARNING, __file__, 1, "carrier above Nyquist", None, None
    )
    text = ColorFormatter().format(record)

    assert "carrier above Nyquist" in text
    assert text.startswith(ColorFormatter.YELLOW)
    assert text.endswith(ColorFormatter.RESET)


def test_logger_set_level_unknown_name():
    import pytest

    from optiband import logger

    before = logger.logger.level
    with pytest.raises(ValueError, match="Unknown log level"):
        logger.set_log_level("chatty")
    assert logger.logger.level == before


def test_color_formatter_leaves_custom_levels_plain():
    from optiband.logger import ColorFormatter

    record = logging.LogRecord("optiband", 25, __file__, 1, "notice", None, None)
    text = ColorFormatter().format(record)

    assert "notice" in text
    assert "\x1b[" not in text
