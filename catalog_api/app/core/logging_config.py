"""
Logging setup for the Catalog API.

``create_app`` calls ``setup_logging`` with ``Settings.log_level`` and
``Settings.log_file`` (the ``LOG_LEVEL`` and ``LOG_FILE`` environment
variables).  Records always go to stderr; when ``LOG_FILE`` names a
path they are also appended to that file.  Modules log through
``logging.getLogger(__name__)`` and never touch handlers themselves.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the API's handlers to the root logger.

    Does nothing if the root logger already has handlers, e.g. when a
    second app is built in the same process or when the test runner
    has installed its own capture handler.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"``; unknown names mean ``INFO``.
    logfile : Optional[str]
        File to append records to, in addition to stderr.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in _build_handlers(logfile):
        root.addHandler(handler)
