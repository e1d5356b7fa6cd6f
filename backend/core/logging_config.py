"""
Logging setup for the engine service.

Console logging with a single formatter, configured once. Modules log through
``logging.getLogger(__name__)``.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
HANDLER_NAME = "engine-console"

_VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger with a console handler.

    Calling it again only updates the level; handlers are never duplicated.
    """
    level_str = str(level or "INFO").upper()
    if level_str not in _VALID_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_str}'. "
            f"Valid options: {list(_VALID_LEVELS.keys())}"
        )

    root = logging.getLogger()
    root.setLevel(_VALID_LEVELS[level_str])

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        root.addHandler(handler)

    return root
