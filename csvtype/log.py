import logging
import sys


def get_logger(name: str = "csvtype", level: str = "WARNING") -> logging.Logger:
    """
    Logger writing plain lines to stdout.

    Configured once per name; later calls return the same logger
    unchanged.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
