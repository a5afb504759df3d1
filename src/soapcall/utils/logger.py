# soapcall/utils/logger.py
"""
Logging configuration for the soapcall package.

The package never configures logging on import; applications call
setup_logger() or configure_logging() once at startup.
"""

import logging
from pathlib import Path
from sys import stdout

from .config_loader import LoggingSection

PACKAGE_LOGGER_NAME: str = 'soapcall'

LOG_FORMAT: logging.Formatter = logging.Formatter(
    fmt='%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)


def setup_logger(
    logging_level: int = logging.INFO,
    log_file_path: Path | None = None,
) -> logging.Logger:
    """
    Set up logging for the soapcall package.

    Configures the package-level logger so that all modules (soapcall.soap_client,
    soapcall.transport, ...) share one handler and level. Calling it again
    updates the level instead of adding duplicate handlers.

    Args:
        logging_level: The logging level to use. Defaults to INFO.
        log_file_path: Optional log file. If None, logs go to stdout.

    Returns:
        The package logger.

    Example:
        >>> logger = setup_logger(logging_level=logging.DEBUG)
    """
    package_logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(logging_level)

    if not package_logger.handlers:
        handler: logging.Handler
        if log_file_path is not None:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(
                filename=str(log_file_path),
                mode='a',
                encoding='utf-8',
            )
        else:
            handler = logging.StreamHandler(stdout)

        handler.setFormatter(LOG_FORMAT)
        handler.setLevel(logging_level)
        package_logger.addHandler(handler)

    else:
        for existing_handler in package_logger.handlers:
            existing_handler.setLevel(logging_level)

    return package_logger


def configure_logging(section: LoggingSection) -> logging.Logger:
    """
    Configure console and optional file logging from a config section.

    The package logger level is set to the most verbose of the two handler
    levels so each handler filters on its own level.

    Args:
        section: The validated 'logging' section of the config.

    Returns:
        The package logger.
    """
    package_logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    for existing_handler in list(package_logger.handlers):
        package_logger.removeHandler(existing_handler)
        existing_handler.close()

    console_level: int = section.get_console_level_int()
    file_level: int | None = section.get_file_level_int()

    console_handler: logging.Handler = logging.StreamHandler(stdout)
    console_handler.setFormatter(LOG_FORMAT)
    console_handler.setLevel(console_level)
    package_logger.addHandler(console_handler)

    effective_level: int = console_level
    if section.file_path is not None and file_level is not None:
        section.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.FileHandler(
            filename=str(section.file_path),
            mode='a',
            encoding='utf-8',
        )
        file_handler.setFormatter(LOG_FORMAT)
        file_handler.setLevel(file_level)
        package_logger.addHandler(file_handler)
        effective_level = min(console_level, file_level)

    package_logger.setLevel(effective_level)
    return package_logger
