"""Logging setup.

Standard `logging` with a single console handler. Call once from an entry
point (Streamlit page or script); library modules only create loggers.
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(handler, "_docinbox", False) for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler._docinbox = True  # type: ignore[attr-defined]
    root.addHandler(handler)
