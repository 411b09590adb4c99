"""Traefik TOML TLS configuration output."""

import os
from pathlib import Path

from .models import KeyPair

CONFIG_HEADER = "# ~~~ Autogenerated config start - Do not touch! ~~~"
CONFIG_FOOTER = "# ~~~ Autogenerated config end ~~~"
DEFAULT_ENTRY_POINTS = ("https",)


def prefixed_path(path: str, path_prefix: str = "") -> str:
    """Join prefix and path; an absolute path is placed under the prefix."""
    if not path_prefix:
        return path
    return os.path.normpath(os.path.join(path_prefix, path.lstrip(os.sep)))


_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _toml_string(value: str) -> str:
    """TOML basic string; control characters become escapes."""
    out = []
    for ch in value:
        if ch in _TOML_ESCAPES:
            out.append(_TOML_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def render_config(
    pairs: list[KeyPair],
    path_prefix: str = "",
    entry_points=DEFAULT_ENTRY_POINTS,
) -> str:
    """Build the config text: header, one [[tls]] table per pair, footer."""
    entry_list = ", ".join(_toml_string(e) for e in entry_points)
    parts = [CONFIG_HEADER + "\n\n"]
    for pair in pairs:
        cert_path = prefixed_path(pair.cert_path, path_prefix)
        key_path = prefixed_path(pair.key_path, path_prefix)
        parts.append(
            "[[tls]]\n"
            f"  entryPoints = [{entry_list}]\n"
            "  [tls.certificate]\n"
            f"    certFile = {_toml_string(cert_path)}\n"
            f"    keyFile = {_toml_string(key_path)}\n"
            "\n"
        )
    parts.append(CONFIG_FOOTER)
    return "".join(parts)


def write_config(
    pairs: list[KeyPair],
    out_file: str,
    path_prefix: str = "",
    entry_points=DEFAULT_ENTRY_POINTS,
    logger=None,
) -> None:
    """
    Write the rendered config to out_file (mode 0o644). OSError propagates.
    Undecodable file name bytes are written back unchanged.
    """
    data = render_config(pairs, path_prefix, entry_points).encode("utf-8", errors="surrogateescape")
    if logger:
        logger.info("Writing config to %s...", out_file)
    path = Path(out_file)
    path.write_bytes(data)
    try:
        path.chmod(0o644)
    except OSError:
        if logger:
            logger.warning("Could not set file permissions 0o644 on %s", out_file)
