# mlb_board/logging_setup.py
"""
Process-wide logging configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(levelname)-5.5s %(name)s\n    %(message)s\n"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: str = "", level: str = "INFO") -> logging.Handler:
    """
    Install a single handler on the root logger.

    Writes to log_file (creating its directory) or to stderr when log_file is empty.
    Unknown level names fall back to INFO. Calling again replaces the handler
    installed by the previous call.
    """
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.set_name("mlb_board")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "mlb_board":
            root.removeHandler(existing)
            existing.close()
    root.addHandler(handler)

    resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    # urllib3 logs every connection at DEBUG; keep it quiet unless asked.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return handler
