"""
Logging Configuration
Routes the 'habitatlayout' loggers to stdout and, optionally, a log file.
The GUI console dock attaches its own handler on top of this.
"""
import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Third-party loggers that are chatty at INFO while the 3D preview redraws
QUIET_LOGGERS = ("pyvista",)


def _make_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Level number or name ("DEBUG", "info", ...).
        log_file: Optional path; the file is overwritten on every start.

    Returns:
        The configured 'habitatlayout' logger.
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logger = logging.getLogger("habitatlayout")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    logger.addHandler(_make_handler(logging.StreamHandler(sys.stdout), level, formatter))
    if log_file:
        logger.addHandler(
            _make_handler(logging.FileHandler(log_file, mode='w', encoding='utf-8'), level, formatter)
        )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
