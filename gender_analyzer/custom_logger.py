"""Logging helpers shared by the package and the command-line front end."""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_global_logger(verbose=False, stream=None):
    """
    Configure the root logger for command-line use.

    Args:
        verbose (bool): Log at DEBUG instead of INFO.
        stream: Output stream, stderr by default so exported data on stdout stays clean.

    Returns:
        logging.Logger: The root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Clear existing handlers to avoid duplicate logs
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logger


def get_logger(name):
    """
    Return the module logger for ``name``.

    Handlers are left to the application (see configure_global_logger).
    """
    return logging.getLogger(name)


def mask_secret(secret, max_len=20):
    """Render a credential as a run of asterisks for log output."""
    if not secret:
        return ""
    return "*" * min(len(secret), max_len)
