from __future__ import annotations

import base64
import binascii
import hashlib
import struct
from dataclasses import dataclass
from typing import Iterable

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from .errors import InvalidKeyError, NoKeyFoundError
from .transport import Fetcher

DEFAULT_FETCH_TIMEOUT_S = 15.0
NO_KEY_FOUND_MESSAGE = "ssh: no key found"

KEY_TYPES = frozenset(
    {
        "ssh-rsa",
        "ssh-dss",
        "ssh-ed25519",
        "ecdsa-sha2-nistp256",
        "ecdsa-sha2-nistp384",
        "ecdsa-sha2-nistp521",
        "sk-ssh-ed25519@openssh.com",
        "sk-ecdsa-sha2-nistp256@openssh.com",
    }
)


@dataclass(frozen=True)
class SshPublicKey:
    key_type: str
    blob: str
    comment: str | None = None
    options: str | None = None

    @property
    def line(self) -> str:
        parts = [self.key_type, self.blob]
        if self.comment:
            parts.append(self.comment)
        return " ".join(parts)

    @property
    def fingerprint(self) -> str:
        digest = hashlib.sha256(base64.b64decode(self.blob)).digest()
        return "SHA256:" + base64.b64encode(digest).decode("ascii").rstrip("=")


def _split_options(line: str) -> tuple[str | None, str]:
    first = line.split(None, 1)[0]
    if first in KEY_TYPES:
        return None, line
    # options may hold quoted whitespace: command="echo hi",no-pty
    in_quotes = False
    for idx, ch in enumerate(line):
        if ch == '"' and (idx == 0 or line[idx - 1] != "\\"):
            in_quotes = not in_quotes
        elif ch.isspace() and not in_quotes:
            return line[:idx], line[idx:].lstrip()
    return None, line


def _wire_key_type(raw: bytes) -> str:
    if len(raw) < 4:
        raise InvalidKeyError("key blob too short")
    (size,) = struct.unpack(">I", raw[:4])
    if size == 0 or len(raw) < 4 + size:
        raise InvalidKeyError("key blob truncated")
    try:
        name = raw[4:4 + size].decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidKeyError("key blob type is not ascii") from e
    if len(raw) == 4 + size:
        raise InvalidKeyError("key blob carries no key data")
    return name


def parse_authorized_key(line: str) -> SshPublicKey:
    """Parse one authorized_keys line: ``[options] <type> <base64> [comment]``."""
    text = (line or "").strip()
    if not text or text.startswith("#"):
        raise InvalidKeyError("empty line")

    options, rest = _split_options(text)
    fields = rest.split(None, 2)
    if len(fields) < 2:
        raise InvalidKeyError("expected key type and key data")
    key_type, blob = fields[0], fields[1]
    comment = fields[2].strip() if len(fields) > 2 else None
    if key_type not in KEY_TYPES:
        raise InvalidKeyError(f"unknown key type: {key_type}")

    try:
        raw = base64.b64decode(blob, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidKeyError("key data is not valid base64") from e

    wire_type = _wire_key_type(raw)
    if wire_type != key_type:
        raise InvalidKeyError(f"key type mismatch: {key_type} != {wire_type}")

    try:
        serialization.load_ssh_public_key(f"{key_type} {blob}".encode("ascii"))
    except UnsupportedAlgorithm as e:
        # security-key types depend on the installed cryptography version;
        # for them the wire header check above is all we can do.
        if not key_type.startswith("sk-"):
            raise InvalidKeyError(f"unsupported key type: {key_type}") from e
    except ValueError as e:
        raise InvalidKeyError(str(e)) from e

    return SshPublicKey(key_type=key_type, blob=blob, comment=comment or None, options=options)


def parse_authorized_keys(content: bytes | str) -> list[SshPublicKey]:
    text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
    keys: list[SshPublicKey] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            keys.append(parse_authorized_key(line))
        except InvalidKeyError:
            continue
    return keys


def extract_keys(fetcher: Fetcher, url: str, *, timeout: float = DEFAULT_FETCH_TIMEOUT_S) -> list[SshPublicKey]:
    body = fetcher.get(url, timeout)
    keys = parse_authorized_keys(body)
    if not keys:
        raise NoKeyFoundError(NO_KEY_FOUND_MESSAGE)
    return keys


def render_authorized_keys(keys: Iterable[SshPublicKey]) -> str:
    return "".join(f"{key.line}\n" for key in keys)
