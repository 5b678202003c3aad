import os
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

import config

# --- LOGGING SETUP ---

def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the library logger.

    Falls back to the values in Settings when no explicit level or file is given.
    Repeated calls are safe: the level is applied to every attached handler and a
    rotating file handler is added for a log file that does not have one yet.
    """
    settings = config.get_settings()
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    logger = logging.getLogger(config.LOGGER_NAME)
    logger.setLevel(level)
    formatter = logging.Formatter(config.LOG_FORMAT)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = os.path.abspath(log_file)
        has_file_handler = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )
        if not has_file_handler:
            os.makedirs(os.path.dirname(log_path), exist_ok=True)
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=config.LOG_MAX_BYTES,
                backupCount=config.LOG_BACKUP_COUNT
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger

# Handlers are attached by setup_logging(); importing the library stays silent.
logger = logging.getLogger(config.LOGGER_NAME)

# --- CUSTOM EXCEPTIONS ---

class OptimusError(ValueError):
    """Base class for every error raised while building an Optimus instance."""
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class NotPrimeError(OptimusError):
    # The message never contains the rejected value; it is only on .value.
    def __init__(self, value: int, detail: str = "Argument provided is not prime"):
        super().__init__(detail)
        self.value = value

class NoModInverseError(OptimusError):
    def __init__(self, value: int, detail: str = "Cannot calculate mod inverse for argument provided"):
        super().__init__(detail)
        self.value = value

class ConfigurationError(OptimusError):
    def __init__(self, detail: str = "Optimus parameters are not configured"):
        super().__init__(detail)
