"""Recursive file enumeration under a certificate directory."""

import os

from . import events
from .events import NullReporter, Reporter


def find_files(root: str, reporter: Reporter | None = None) -> list[str]:
    """
    Return every regular file below root, depth first. Sibling order is
    whatever the filesystem lists. Raises OSError if root or any
    subdirectory cannot be listed.
    """
    reporter = reporter or NullReporter()
    files: list[str] = []
    _walk(os.path.normpath(root), files, reporter)
    return files


def _walk(base: str, files: list[str], reporter: Reporter) -> None:
    reporter.emit(events.DIRECTORY_ENTERED, path=base)

    with os.scandir(base) as it:
        entries = list(it)

    for entry in entries:
        path = os.path.join(base, entry.name)
        if entry.is_dir():
            _walk(path, files, reporter)
        elif entry.is_file():
            files.append(path)
