# core/logging_config.py
import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "volunteer"


def setup_logger(level: str = None) -> logging.Logger:
    """One stream handler for the whole app; LOG_LEVEL overrides INFO."""
    logger = logging.getLogger(LOGGER_NAME)

    # Reloads and repeated imports keep the first handler
    if logger.handlers:
        return logger

    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # Records stay out of the root logger so uvicorn does not print them twice
    logger.propagate = False

    return logger


logger = setup_logger()
