"""Logging setup: file or stderr, ISO 8601 UTC timestamps."""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path


class UtcFormatter(logging.Formatter):
    """Timestamps as 2024-01-31T12:00:00.000Z."""

    def formatTime(self, record, datefmt=None):
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return f"{stamp:%Y-%m-%dT%H:%M:%S}.{int(record.msecs):03d}Z"


def setup_logging(log_file: str | None = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the certpair logger, replacing (and closing) earlier handlers.
    If log_file is set, append to file; otherwise log to stderr.
    Directory progress lines are DEBUG and only shown with verbose=True.
    """
    root = logging.getLogger("certpair")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        # paths from the walk may carry undecodable bytes as surrogates
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8", errors="backslashreplace")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(UtcFormatter("%(asctime)s %(levelname)s %(message)s"))
    root.addHandler(handler)

    return root
