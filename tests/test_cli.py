"""CLI integration: argument validation, config output, logging."""

import os
import subprocess
import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization

from conftest import build_certificate, write_cert, write_key


def _run_certpair(*args):
    """Run certpair CLI via `python -m certpair`; return (returncode, stdout, stderr)."""
    result = subprocess.run(
        [sys.executable, "-m", "certpair"] + list(args),
        capture_output=True,
        text=True,
        cwd=Path(__file__).resolve().parent.parent,
    )
    return result.returncode, result.stdout, result.stderr


def test_cli_missing_out(tmp_path):
    code, _, err = _run_certpair(str(tmp_path))
    assert code != 0
    assert "output file not set" in err.lower()


def test_cli_missing_directory(tmp_path):
    code, _, err = _run_certpair("--out", str(tmp_path / "tls.toml"))
    assert code != 0
    assert "directory" in err.lower()


def test_cli_directory_does_not_exist(tmp_path):
    code, _, err = _run_certpair("--out", str(tmp_path / "tls.toml"), str(tmp_path / "nope"))
    assert code != 0
    assert "not a directory" in err.lower()


def test_cli_invalid_workers(tmp_path):
    code, _, err = _run_certpair("--out", str(tmp_path / "tls.toml"), "--workers", "0", str(tmp_path))
    assert code != 0
    assert "workers" in err.lower()


def test_cli_writes_config(tmp_path, ec_key, other_ec_key):
    certs = tmp_path / "certs"
    write_cert(certs / "a.crt", build_certificate(ec_key, "a.test"))
    write_key(certs / "a.key", ec_key)
    write_cert(certs / "b.crt", build_certificate(other_ec_key, "b.test", expired=True))
    write_key(certs / "b.key", other_ec_key)
    (certs / "notes.txt").write_text("not a certificate")
    out = tmp_path / "tls.toml"

    code, _, err = _run_certpair("-o", str(out), "-p", "/etc/traefik", str(certs))

    assert code == 0, err
    text = out.read_text(encoding="utf-8")
    assert text.count("[[tls]]") == 1
    assert f'certFile = "/etc/traefik{certs / "a.crt"}"' in text
    assert f'keyFile = "/etc/traefik{certs / "a.key"}"' in text
    assert "Valid pair: a.crt + a.key" in err
    assert "Found expired certificate" in err
    assert "WARNING" in err


def test_cli_nothing_found_writes_nothing(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    out = tmp_path / "tls.toml"

    code, _, err = _run_certpair("-o", str(out), str(empty))

    assert code == 0, err
    assert not out.exists()


def test_cli_unwritable_out(pair_dir, tmp_path):
    code, _, err = _run_certpair("-o", str(tmp_path / "no" / "such" / "tls.toml"), str(pair_dir))
    assert code == 1
    assert "error" in err.lower()


def test_cli_log_file(pair_dir, tmp_path):
    log_file = tmp_path / "logs" / "certpair.log"
    out = tmp_path / "tls.toml"

    code, _, err = _run_certpair("-o", str(out), "--log-file", str(log_file), "-v", str(pair_dir))

    assert code == 0, err
    log_text = log_file.read_text(encoding="utf-8")
    assert "Searching for certificates in" in log_text
    assert "Found 1 certificates and 1 private keys!" in log_text
    assert "Found 1 valid keypairs!" in log_text
    assert "Writing config to" in log_text


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs byte file names")
def test_cli_non_utf8_file_name(tmp_path, ec_key):
    """A pair whose certificate name is not UTF-8 is written with its raw name."""
    certs = tmp_path / "certs"
    certs.mkdir()
    cert_path = os.path.join(os.fsencode(certs), b"\xffsite.crt")
    with open(cert_path, "wb") as f:
        f.write(build_certificate(ec_key).public_bytes(serialization.Encoding.PEM))
    write_key(certs / "site.key", ec_key)
    out = tmp_path / "tls.toml"

    code, _, err = _run_certpair("-o", str(out), str(certs))

    assert code == 0, err
    assert "Traceback" not in err
    data = out.read_bytes()
    assert b'certFile = "' + cert_path + b'"' in data
