"""Tests for application logging setup."""
import logging
import logging.handlers

from utils.logging import LOGGER_NAME, LoggingManager, setup_logging


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_configures_once() -> None:
    logger = setup_logging()
    count = len(logger.handlers)
    assert setup_logging(verbose=True) is logger
    assert len(logger.handlers) == count
    assert logger.level == logging.INFO


def test_verbose_level() -> None:
    assert setup_logging(verbose=True).level == logging.DEBUG


def test_explicit_level_wins() -> None:
    assert setup_logging(verbose=True, log_level="warning").level == logging.WARNING


def test_rotating_file(tmp_path) -> None:
    path = tmp_path / "logs" / "run.log"
    logger = setup_logging(log_to_file=True, log_file=str(path))
    handlers = _file_handlers(logger)
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)

    logger.info("stream started")
    handlers[0].flush()
    assert "stream started" in path.read_text()


def test_plain_file_without_rotation(tmp_path) -> None:
    logger = setup_logging(log_to_file=True, log_file=str(tmp_path / "run.log"), enable_rotation=False)
    handler = _file_handlers(logger)[0]
    assert not isinstance(handler, logging.handlers.RotatingFileHandler)


def test_reset_detaches_handlers() -> None:
    logger = setup_logging()
    LoggingManager.get_instance().reset(LOGGER_NAME)
    assert logger.handlers == []
    assert not LoggingManager.get_instance().is_logger_configured(LOGGER_NAME)
