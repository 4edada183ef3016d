"""Console logging for the job worker."""
import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Send the ``lithophane`` loggers to stdout and return the package logger.

    Calling it again replaces the handler instead of adding a second one.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))

    logger = logging.getLogger("lithophane")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    return logger
