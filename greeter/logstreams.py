"""Route the log messages of the app and the web server to stdout.

All modules log via `logging.getLogger("app")` and may pass a single dict with
context information, eg `logit.error("cannot bind", {"port": 8080})`. The
formatter appends that dict to the message.
"""

import logging
import sys
from typing import Mapping

# Loggers whose output we want to see on the terminal.
LOGGER_NAMES = ("app", "hypercorn.error", "hypercorn.access")


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if isinstance(record.args, Mapping) and len(record.args) > 0:
            ctx = " ".join(f"{k}={v!r}" for k, v in record.args.items())
            line = f"{line} ({ctx})"
        return line


def setup(level: str) -> None:
    """Install a stdout handler on all relevant loggers.

    Unknown log levels fall back to INFO. Calling this function repeatedly
    replaces the previously installed handlers.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ContextFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(numeric)
        logger.propagate = False
