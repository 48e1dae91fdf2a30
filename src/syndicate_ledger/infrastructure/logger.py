import logging
import sys
from syndicate_ledger.config import settings

ROOT_LOGGER = "syndicate_ledger"

def setup_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """挂一个 stdout handler，重复调用不会重复挂"""
    logger = logging.getLogger(name)
    if not logger.handlers:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        logger.setLevel(level)
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        logger.addHandler(handler)
    return logger
