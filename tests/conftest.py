"""Shared fixtures: throwaway keys and self-signed certificates written as PEM files."""

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID


def generate_key(key_type: str = "ecc"):
    if key_type == "rsa":
        return rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return ec.generate_private_key(ec.SECP256R1())


def build_certificate(private_key, common_name: str = "example.test", valid_days: int = 30, expired: bool = False):
    """Self-signed certificate; expired=True puts NotAfter one day in the past."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    if expired:
        not_before = now - timedelta(days=valid_days)
        not_after = now - timedelta(days=1)
    else:
        not_before = now - timedelta(days=1)
        not_after = now + timedelta(days=valid_days)

    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
        .sign(private_key=private_key, algorithm=hashes.SHA256())
    )


def write_cert(path, cert) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return str(path)


def write_key(path, key, fmt=serialization.PrivateFormat.PKCS8, passphrase: bytes | None = None) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    encryption = (
        serialization.BestAvailableEncryption(passphrase) if passphrase else serialization.NoEncryption()
    )
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=fmt,
            encryption_algorithm=encryption,
        )
    )
    return str(path)


@pytest.fixture(scope="session")
def ec_key():
    return generate_key("ecc")


@pytest.fixture(scope="session")
def other_ec_key():
    return generate_key("ecc")


@pytest.fixture(scope="session")
def rsa_key():
    return generate_key("rsa")


@pytest.fixture
def pair_dir(tmp_path, ec_key):
    """Directory with a.crt and a.key sharing one EC key."""
    write_cert(tmp_path / "a.crt", build_certificate(ec_key, "a.test"))
    write_key(tmp_path / "a.key", ec_key)
    return tmp_path
