import logging
import re

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logger(logger: logging.Logger, verbose: bool) -> logging.Logger:
    """Attach a stream handler at DEBUG level when verbose is enabled.

    Loggers that already have handlers are left untouched.

    Args:
        logger: The logger to configure
        verbose: Whether verbose output was requested

    Returns:
        The same logger

    """
    if verbose and not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    return logger


def slugify(value: str) -> str:
    """Get a filesystem and HTML id safe version of a label.

    Args:
        value: Label to convert

    Returns:
        Lowercase string of ascii letters, digits and dashes

    """
    slug = re.sub(r"[^a-z0-9]+", "-", str(value).lower()).strip("-")
    return slug or "item"
