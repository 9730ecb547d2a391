# iptally/utils/logging.py
from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "iptally"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    root = logging.getLogger(ROOT_LOGGER)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    # keep records away from whatever the host application configured
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger living under the package's root logger.

    Modules call this once at import time: `log = get_logger(__name__)`.
    """
    _configure_root()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_verbosity(verbose: bool) -> None:
    _configure_root()
    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
