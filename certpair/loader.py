"""Classify and parse candidate files into certificates and private keys."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime

from cryptography.exceptions import UnsupportedAlgorithm

from . import crypto_utils
from . import events
from .errors import CertPairError, ExpiredCertificateError, InvalidFileError, PEMParseError
from .events import NullReporter, Reporter
from .models import LoadedKeyMaterial, LoadResult, MaterialKind

_PARSE_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


def classify(content: bytes, path: str) -> MaterialKind:
    """
    Decide by header substring only. A certificate header wins over a
    private key header when a file carries both.
    """
    if crypto_utils.has_cert_header(content):
        return MaterialKind.CERTIFICATE
    if crypto_utils.has_private_key_header(content):
        return MaterialKind.PRIVATE_KEY
    raise InvalidFileError(path)


def load_pem_file(path: str, now: datetime | None = None) -> LoadedKeyMaterial:
    """
    Read and parse one file.

    Raises OSError if the file cannot be read, InvalidFileError if it has no
    PEM header, PEMParseError if parsing fails and ExpiredCertificateError if
    the certificate's NotAfter is before now.
    """
    content = crypto_utils.read_file(path)
    kind = classify(content, path)

    if kind is MaterialKind.CERTIFICATE:
        try:
            cert = crypto_utils.load_certificate(content)
        except _PARSE_ERRORS as e:
            raise PEMParseError(path, str(e)) from e
        not_after = cert.not_valid_after_utc
        if crypto_utils.is_expired(cert, now):
            raise ExpiredCertificateError(path, not_after)
        try:
            return LoadedKeyMaterial(
                path=path,
                public_key=crypto_utils.certificate_public_key(cert),
                kind=kind,
                certificate=cert,
                not_after=not_after,
            )
        except _PARSE_ERRORS as e:
            raise PEMParseError(path, str(e)) from e

    try:
        key = crypto_utils.load_private_key(content)
        return LoadedKeyMaterial(path=path, public_key=crypto_utils.private_key_public_key(key), kind=kind)
    except _PARSE_ERRORS as e:
        raise PEMParseError(path, str(e)) from e


def load_file(path: str, reporter: Reporter | None = None, now: datetime | None = None) -> LoadResult:
    """Load one file, capturing per-file failures in the result."""
    reporter = reporter or NullReporter()
    try:
        material = load_pem_file(path, now=now)
    except ExpiredCertificateError as e:
        reporter.emit(events.CERTIFICATE_EXPIRED, path=path, not_after=e.not_after.isoformat())
        return LoadResult(path=path, error=e)
    except InvalidFileError as e:
        reporter.emit(events.INVALID_FILE, path=path)
        return LoadResult(path=path, error=e)
    except (CertPairError, OSError) as e:
        reporter.emit(events.LOAD_FAILED, path=path, error=str(e))
        return LoadResult(path=path, error=e)

    if material.kind is MaterialKind.CERTIFICATE:
        reporter.emit(events.CERTIFICATE_LOADED, path=path)
    else:
        reporter.emit(events.PRIVATE_KEY_LOADED, path=path)
    return LoadResult(path=path, material=material)


def load_all(
    paths: list[str],
    max_workers: int | None = None,
    reporter: Reporter | None = None,
    now: datetime | None = None,
) -> list[LoadResult]:
    """
    Load every path on a thread pool, one task per file. Returns once every
    task has reported, in completion order.
    """
    reporter = reporter or NullReporter()
    now = crypto_utils.as_utc(now)
    results: list[LoadResult] = []
    if not paths:
        return results

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_path = {executor.submit(load_file, path, reporter, now): path for path in paths}
        for future in as_completed(future_to_path):
            path = future_to_path[future]
            try:
                results.append(future.result())
            except Exception as e:
                reporter.emit(events.LOAD_FAILED, path=path, error=f"Task execution error: {e}")
                results.append(LoadResult(path=path, error=e))

    return results
