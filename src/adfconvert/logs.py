import logging
import os
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from adfconvert.config import ConverterConfiguration, get_configuration
from adfconvert.constants import LOGGER_NAME
from adfconvert.files import get_log_file


def setup_logging(configuration: ConverterConfiguration | None = None) -> logging.Logger:
    """Configures the package logger.

    The logger level comes from the configuration. Records are written as JSON lines to the file named by
    `ADFCONVERT_LOG_FILE`, the configured `log_file` or the default log file, in that order.

    Args:
        configuration: the configuration to use; defaults to the active configuration.

    Returns:
        The package logger.
    """

    configuration = configuration or get_configuration()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(configuration.log_level or logging.WARNING)

    if adfconvert_log_file := os.getenv('ADFCONVERT_LOG_FILE'):
        log_file = Path(adfconvert_log_file).resolve()
    elif config_log_file := configuration.log_file:
        log_file = Path(config_log_file).resolve()
    else:
        log_file = get_log_file()

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == Path(log_file):
            return logger

    try:
        fh = logging.FileHandler(log_file)
    except OSError as e:
        logger.warning(f'Failed to create log file handler: {e}')
    else:
        fh.setLevel(configuration.log_level or logging.WARNING)
        fh.setFormatter(
            JsonFormatter('%(asctime)s %(levelname)s %(message)s %(lineno)s %(module)s %(pathname)s ')
        )
        logger.addHandler(fh)
    return logger
