"""Logging setup shared by the package.

Usage:
    from bookpress.log import get_logger
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_ROOT_NAME = "bookpress"


def setup_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``bookpress`` hierarchy.

    The console handler is attached once to the package root logger; child
    loggers propagate to it. Level comes from ``BOOKPRESS_LOG_LEVEL``.
    """
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        level_name = os.environ.get("BOOKPRESS_LOG_LEVEL", "INFO").upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(console)

    if not name or name == _ROOT_NAME:
        return root
    if not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Alias for setup_logger."""
    return setup_logger(name)
