"""Logging setup for the application."""

from logging.handlers import RotatingFileHandler
import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """
    Attach console (and optionally rotating file) handlers to the package logger.

    Parameters
    ----------
    level : str, default="INFO"
        Level name for the ``doc_ui`` logger
    log_file : str, optional
        File to log to; rotated at 1 MB with three backups

    Returns
    -------
    logging.Logger
        The configured ``doc_ui`` logger

    Notes
    -----
    Calling this again replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger("doc_ui")
    logger.setLevel(level.upper())
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)
    if log_file:
        fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)
    return logger
