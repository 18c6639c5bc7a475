"""
Logger factory honouring the configured log level.
"""

import logging

from ..config import get_settings

_configured = False


def _configure() -> None:
    global _configured
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root = logging.getLogger("tours")
    root.addHandler(handler)
    root.setLevel(get_settings().log_level.upper())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``tours`` namespace."""
    if not _configured:
        _configure()
    return logging.getLogger(name)
