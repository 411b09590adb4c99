"""Pair certificates with private keys by canonical public key equality."""

import os
from concurrent.futures import ThreadPoolExecutor, as_completed

from . import events
from .errors import NoMatchFoundError
from .events import NullReporter, Reporter
from .models import KeyPair, LoadedKeyMaterial, PairResult


def index_private_keys(private_keys: list[LoadedKeyMaterial]) -> dict[bytes, LoadedKeyMaterial]:
    """
    Map public key bytes to private key material. When several key files
    share a public key, the lexicographically smallest path wins.
    """
    index: dict[bytes, LoadedKeyMaterial] = {}
    for key in sorted(private_keys, key=lambda k: k.path):
        index.setdefault(key.public_key, key)
    return index


def match_certificate(cert: LoadedKeyMaterial, index: dict[bytes, LoadedKeyMaterial]) -> PairResult:
    key = index.get(cert.public_key)
    if key is None:
        return PairResult(cert_path=cert.path, error=NoMatchFoundError(cert.path))
    return PairResult(
        cert_path=cert.path,
        pair=KeyPair(certificate=cert.certificate, cert_path=cert.path, key_path=key.path),
    )


def match_pairs(
    certificates: list[LoadedKeyMaterial],
    private_keys: list[LoadedKeyMaterial],
    max_workers: int | None = None,
    reporter: Reporter | None = None,
) -> list[PairResult]:
    """
    Match every certificate on a thread pool, one task per certificate.
    The key index is built before any task starts and never written after.
    """
    reporter = reporter or NullReporter()
    index = index_private_keys(private_keys)
    results: list[PairResult] = []
    if not certificates:
        return results

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_cert = {executor.submit(match_certificate, cert, index): cert for cert in certificates}
        for future in as_completed(future_to_cert):
            cert = future_to_cert[future]
            try:
                result = future.result()
            except Exception as e:
                result = PairResult(cert_path=cert.path, error=e)

            if result.ok:
                reporter.emit(
                    events.PAIR_FOUND,
                    cert_path=result.pair.cert_path,
                    key_path=result.pair.key_path,
                    cert_name=os.path.basename(result.pair.cert_path),
                    key_name=os.path.basename(result.pair.key_path),
                )
            else:
                reporter.emit(events.NO_MATCH, path=cert.path)
            results.append(result)

    return results
