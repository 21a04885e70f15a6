import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of the HTTP stack; they only speak up with --debug.
QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Configure the 'aivsai' logger to write to stderr at ``level``.
    """
    logger = logging.getLogger("aivsai")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name under the 'aivsai' namespace.
    """
    if name == "aivsai" or name.startswith("aivsai."):
        return logging.getLogger(name)
    return logging.getLogger(f"aivsai.{name}")
