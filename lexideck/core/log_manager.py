# core/log_manager.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from lexideck.config import LOG_DIR, LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logger(name: str = "lexideck") -> logging.Logger:
    """
    Builds the application logger once: console output plus a rotating file
    under LOG_DIR. Repeated calls return the already configured logger.
    """
    app_logger = logging.getLogger(name)
    if app_logger.handlers:
        return app_logger

    app_logger.setLevel(LOG_LEVEL.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(LOG_DIR, LOG_FILE), maxBytes=5_000_000, backupCount=3
        )
        file_handler.setFormatter(formatter)
        app_logger.addHandler(file_handler)
    except OSError as e:
        # Read-only filesystems still get console logging
        app_logger.warning(f"File logging disabled: {e}")

    return app_logger


logger = setup_logger()
