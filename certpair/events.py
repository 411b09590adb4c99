"""
Structured scan events. The walker, loader, matcher and scanner report
progress through a Reporter instead of writing to a logger, so callers can
render events as log lines or collect them for assertions.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

DIRECTORY_ENTERED = "directory_entered"
FILES_FOUND = "files_found"
CERTIFICATE_LOADED = "certificate_loaded"
PRIVATE_KEY_LOADED = "private_key_loaded"
CERTIFICATE_EXPIRED = "certificate_expired"
INVALID_FILE = "invalid_file"
LOAD_FAILED = "load_failed"
MATERIAL_FOUND = "material_found"
PAIR_FOUND = "pair_found"
NO_MATCH = "no_match"
SCAN_FINISHED = "scan_finished"


@dataclass(frozen=True)
class ScanEvent:
    name: str
    fields: dict[str, Any] = field(default_factory=dict)


class Reporter:
    """Receives events. May be called from worker threads."""

    def emit(self, name: str, **fields: Any) -> None:
        raise NotImplementedError


class NullReporter(Reporter):
    def emit(self, name: str, **fields: Any) -> None:
        pass


class RecordingReporter(Reporter):
    """
    Keeps every event in memory, in arrival order, so callers and tests can
    assert on what a scan reported without parsing log output.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.events: list[ScanEvent] = []

    def emit(self, name: str, **fields: Any) -> None:
        with self._lock:
            self.events.append(ScanEvent(name, dict(fields)))

    def named(self, name: str) -> list[ScanEvent]:
        with self._lock:
            return [e for e in self.events if e.name == name]


_MESSAGES = {
    DIRECTORY_ENTERED: (logging.DEBUG, "Searching for certificates in %(path)s..."),
    FILES_FOUND: (logging.INFO, "Found a total of %(count)d files!"),
    CERTIFICATE_LOADED: (logging.INFO, "Certificate: %(path)s"),
    PRIVATE_KEY_LOADED: (logging.INFO, "Private key: %(path)s"),
    CERTIFICATE_EXPIRED: (logging.WARNING, "Found expired certificate: %(path)s (not after %(not_after)s)"),
    INVALID_FILE: (logging.DEBUG, "Skipping file without PEM header: %(path)s"),
    LOAD_FAILED: (logging.ERROR, "Could not load public key from %(path)s: %(error)s"),
    MATERIAL_FOUND: (logging.INFO, "Found %(certificates)d certificates and %(private_keys)d private keys!"),
    PAIR_FOUND: (logging.INFO, "Valid pair: %(cert_name)s + %(key_name)s"),
    NO_MATCH: (logging.WARNING, "No matching private key for certificate: %(path)s"),
    SCAN_FINISHED: (logging.INFO, "Found %(pairs)d valid keypairs!"),
}


class LoggingReporter(Reporter):
    """Renders events as log lines on the certpair logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("certpair.scan")

    def emit(self, name: str, **fields: Any) -> None:
        level, fmt = _MESSAGES.get(name, (logging.INFO, name))
        try:
            message = fmt % fields
        except (KeyError, TypeError, ValueError):
            message = f"{name} {fields}"
        self.logger.log(level, message)
