import logging
from typing import Optional

from colorlog import ColoredFormatter

from app.core.config import get_log_level


def setup_logger(level: Optional[str] = None):
    # Configure the root logger so every module logger inherits the handler
    logger = logging.getLogger()
    logger.setLevel(level or get_log_level())

    # Avoid duplicated handlers on reload
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = ColoredFormatter(
        "%(log_color)s%(levelname)-8s%(reset)s | "
        "%(blue)s%(asctime)s%(reset)s | "
        "%(green)s%(name)s:%(lineno)d%(reset)s | "
        "%(white)s%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "white",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red,bg_white",
        },
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # SQL echo stays off unless explicitly raised
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger
