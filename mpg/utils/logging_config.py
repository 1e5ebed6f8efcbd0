"""
Logging setup for MPG.

MPG runs inside a host process (the provider plugin or a test runner), so the
root logger belongs to the host. Everything here only touches the ``mpg``
logger; records still propagate to whatever the host configured.
"""

import logging
import logging.handlers
from pathlib import Path

LOGGER_NAME = "mpg"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attribute set on handlers created here, so repeated setup only replaces our own handlers
_MPG_HANDLER_FLAG = "_mpg_handler"

# Library default: stay silent unless the host configures logging
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if getattr(handler, _MPG_HANDLER_FLAG, False)]


def _add_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _MPG_HANDLER_FLAG, True)
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)


def reset_logging() -> None:
    """Close and remove every handler previously added by setup_logging."""
    mpg_logger = logging.getLogger(LOGGER_NAME)
    for handler in _own_handlers(mpg_logger):
        mpg_logger.removeHandler(handler)
        handler.close()


def setup_logging(
    log_level: str = "INFO",
    log_to_stdout: bool = False,
    log_to_file: bool = False,
    log_file_path: str = "log.txt",
) -> logging.Logger:
    """
    Configure the ``mpg`` logger without touching the root logger.

    Args:
        log_level: Level applied to the ``mpg`` logger
        log_to_stdout: Attach a stream handler, for standalone use without host logging
        log_to_file: Attach a rotating file handler
        log_file_path: Path to log file when file logging is enabled

    Returns:
        The configured ``mpg`` logger
    """
    reset_logging()

    mpg_logger = logging.getLogger(LOGGER_NAME)
    mpg_logger.setLevel(log_level.upper())

    if log_to_stdout:
        _add_handler(mpg_logger, logging.StreamHandler())

    if log_to_file:
        try:
            Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
            # max 10MB, keep 5 files
            _add_handler(
                mpg_logger,
                logging.handlers.RotatingFileHandler(log_file_path, maxBytes=10 * 1024 * 1024, backupCount=5),
            )
            mpg_logger.info(f"File logging enabled: {log_file_path}")
        except OSError as e:
            mpg_logger.exception(f"Failed to setup file logging to {log_file_path}: {e}")

    return mpg_logger
