"""certpair: pair TLS certificates with private keys and emit Traefik TLS config."""

from .models import KeyPair, LoadedKeyMaterial, MaterialKind, ScanResult, ScanStats
from .scanner import scan

__all__ = ["KeyPair", "LoadedKeyMaterial", "MaterialKind", "ScanResult", "ScanStats", "scan"]
