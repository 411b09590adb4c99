"""Run orchestration: walk, load, partition, match."""

from datetime import datetime

from . import events
from . import loader
from . import matching
from . import walker
from .errors import ExpiredCertificateError, InvalidFileError, NoMatchFoundError
from .events import NullReporter, Reporter
from .models import MaterialKind, ScanResult, ScanStats


def scan(
    root: str,
    max_workers: int | None = None,
    reporter: Reporter | None = None,
    now: datetime | None = None,
) -> ScanResult:
    """
    Find every valid certificate/private key pair below root.

    Only an unreadable directory (OSError) is fatal. A tree without any
    certificate or private key yields an empty result.
    """
    reporter = reporter or NullReporter()
    stats = ScanStats()

    files = walker.find_files(root, reporter=reporter)
    stats.files_found = len(files)
    reporter.emit(events.FILES_FOUND, count=stats.files_found)

    certificates = []
    private_keys = []
    for result in loader.load_all(files, max_workers=max_workers, reporter=reporter, now=now):
        if result.ok:
            if result.material.kind is MaterialKind.CERTIFICATE:
                certificates.append(result.material)
            else:
                private_keys.append(result.material)
        elif isinstance(result.error, ExpiredCertificateError):
            stats.expired += 1
        elif isinstance(result.error, InvalidFileError):
            stats.invalid += 1
        else:
            stats.failed += 1

    stats.certificates_found = len(certificates)
    stats.private_keys_found = len(private_keys)
    reporter.emit(
        events.MATERIAL_FOUND,
        certificates=stats.certificates_found,
        private_keys=stats.private_keys_found,
    )

    if not certificates and not private_keys:
        return ScanResult(stats=stats)

    pairs = []
    for result in matching.match_pairs(certificates, private_keys, max_workers=max_workers, reporter=reporter):
        if result.ok:
            pairs.append(result.pair)
        elif isinstance(result.error, NoMatchFoundError):
            stats.unmatched += 1
        else:
            stats.failed += 1

    pairs.sort(key=lambda p: (p.cert_path, p.key_path))
    stats.pairs_found = len(pairs)
    reporter.emit(events.SCAN_FINISHED, pairs=stats.pairs_found)
    return ScanResult(pairs=pairs, stats=stats)
