"""
Logging setup for the FitnessBuddy server and client.

``setup_logging`` is called by ``create_app`` before any routes are
mounted, so the store's "Created workout 3" lines, the startup banner
and the client's request failures all share one format.  uvicorn and
repeated ``create_app`` calls in tests may have configured the root
logger already; in that case nothing is changed.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optionally file) handlers to the root logger.

    Parameters
    ----------
    level : str
        Level name from ``LOG_LEVEL``.  Unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        ``LOG_FILE`` path.  When set, records are also appended there.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # urllib3 logs every connection at DEBUG, which drowns out the
    # client's own request logging.
    if numeric_level > logging.DEBUG:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
