from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any


class KeyMaterialError(ValueError):
    """Raised when key material cannot be built, parsed or cross-checked."""


SECKEY_SIZE = 32
PUBKEY_SIZE = 33
XONLY_PUBKEY_SIZE = 32
SCHNORR_SIG_SIZE = 64
MAX_DER_SIG_SIZE = 72

_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")


@dataclass(frozen=True)
class KeyMaterial:
    """
    Fixed bundle of secp256k1 values exchanged through every format.

    All values are kept in their canonical byte encoding:
    - seckey: 32-byte scalar
    - pubkey: 33-byte SEC1 compressed point
    - schnorr_pubkey: 32-byte BIP-340 x-only key
    - sig: DER-encoded ECDSA signature
    - schnorr_sig: 64-byte BIP-340 signature

    Human-readable formats carry each value as a lowercase hex string,
    compact formats carry raw bytes.
    """
    seckey: bytes
    pubkey: bytes
    schnorr_pubkey: bytes
    sig: bytes
    schnorr_sig: bytes

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self, human_readable: bool) -> dict[str, str | bytes]:
        """Return the wire shape, ordered like the dataclass fields."""
        out: dict[str, str | bytes] = {}
        for name in self.field_names():
            value = getattr(self, name)
            out[name] = value.hex() if human_readable else value
        return out

    @classmethod
    def from_dict(cls, data: Any, human_readable: bool) -> KeyMaterial:
        if not isinstance(data, dict):
            raise KeyMaterialError(f"Expected a mapping, got {type(data).__name__}")

        names = cls.field_names()
        missing = [name for name in names if name not in data]
        if missing:
            raise KeyMaterialError(f"Missing field(s): {', '.join(missing)}")

        extra = [str(key) for key in data if key not in names]
        if extra:
            raise KeyMaterialError(f"Unexpected field(s): {', '.join(extra)}")

        values = {
            name: _parse_value(name, data[name], human_readable)
            for name in names
        }
        _check_sizes(values)
        return cls(**values)

    def __repr__(self) -> str:
        # never print the secret scalar
        return (
            f"KeyMaterial(pubkey={self.pubkey.hex()}, "
            f"schnorr_pubkey={self.schnorr_pubkey.hex()})"
        )


def _parse_value(name: str, value: Any, human_readable: bool) -> bytes:
    if human_readable:
        if not isinstance(value, str):
            raise KeyMaterialError(
                f"{name}: expected hex string, got {type(value).__name__}"
            )
        # bytes.fromhex skips whitespace, canonical hex has none
        if _HEX.fullmatch(value) is None:
            raise KeyMaterialError(f"{name}: invalid hex string")
        return bytes.fromhex(value)

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)

    raise KeyMaterialError(f"{name}: expected bytes, got {type(value).__name__}")


def _check_sizes(values: dict[str, bytes]) -> None:
    expected = {
        "seckey": SECKEY_SIZE,
        "pubkey": PUBKEY_SIZE,
        "schnorr_pubkey": XONLY_PUBKEY_SIZE,
        "schnorr_sig": SCHNORR_SIG_SIZE,
    }
    for name, size in expected.items():
        if len(values[name]) != size:
            raise KeyMaterialError(
                f"{name}: expected {size} bytes, got {len(values[name])}"
            )

    if not 0 < len(values["sig"]) <= MAX_DER_SIG_SIZE:
        raise KeyMaterialError(
            f"sig: DER signature must be 1..{MAX_DER_SIG_SIZE} bytes, "
            f"got {len(values['sig'])}"
        )
