from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
LOG_FILE = "arena_booking.log"


def configure_logging(app: Flask, settings) -> None:
    """File logging in production, console logging in debug."""
    level = getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO)
    package_logger = logging.getLogger("arena_booking")
    package_logger.setLevel(level)

    if app.debug:
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            package_logger.addHandler(handler)
        return

    log_dir = getattr(settings, "LOG_DIR", None)
    if not log_dir:
        return

    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(os.path.join(log_dir, LOG_FILE), maxBytes=10240000, backupCount=10)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler.setLevel(level)

    package_logger.addHandler(file_handler)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(level)
    app.logger.info("arena-booking startup")
