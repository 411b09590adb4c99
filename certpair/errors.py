"""Per-file failures recovered during a scan. Directory and write errors stay OSError."""

from datetime import datetime


class CertPairError(Exception):
    """Base error for a single file that could not contribute to the result."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class InvalidFileError(CertPairError):
    """No certificate or private-key PEM header in the file."""

    def __init__(self, path: str):
        super().__init__(path, "No certificate or private key header")


class PEMParseError(CertPairError):
    """PEM block, certificate or key could not be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(path, f"Could not parse PEM ({reason})")
        self.reason = reason


class ExpiredCertificateError(CertPairError):
    def __init__(self, path: str, not_after: datetime):
        super().__init__(path, f"Certificate expired on {not_after.isoformat()}")
        self.not_after = not_after


class NoMatchFoundError(CertPairError):
    def __init__(self, path: str):
        super().__init__(path, "No matching private key for certificate")
