"""Data passed between the walk, load and match phases."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from cryptography import x509


class MaterialKind(Enum):
    CERTIFICATE = "cert"
    PRIVATE_KEY = "pkey"


@dataclass(frozen=True)
class LoadedKeyMaterial:
    """
    One successfully parsed file. public_key is the canonical DER
    SubjectPublicKeyInfo encoding; certificate and not_after are set
    only for certificates.
    """

    path: str
    public_key: bytes
    kind: MaterialKind
    certificate: x509.Certificate | None = None
    not_after: datetime | None = None

    def __post_init__(self):
        if not self.public_key:
            raise ValueError(f"Empty public key for {self.path}")


@dataclass(frozen=True)
class KeyPair:
    certificate: x509.Certificate
    cert_path: str
    key_path: str


@dataclass(frozen=True)
class LoadResult:
    path: str
    material: LoadedKeyMaterial | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.material is not None


@dataclass(frozen=True)
class PairResult:
    cert_path: str
    pair: KeyPair | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.pair is not None


@dataclass
class ScanStats:
    files_found: int = 0
    certificates_found: int = 0
    private_keys_found: int = 0
    pairs_found: int = 0
    expired: int = 0
    invalid: int = 0
    failed: int = 0
    unmatched: int = 0


@dataclass
class ScanResult:
    pairs: list[KeyPair] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def found_material(self) -> bool:
        """False when the tree held no certificates and no private keys."""
        return bool(self.stats.certificates_found or self.stats.private_keys_found)
