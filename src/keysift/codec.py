from typing import Tuple
import unicodedata

import base58
import bech32
from cryptography.hazmat.primitives import hashes

from keysift.constants import BASE58_CHARS


class CodecError(ValueError):
    pass

class CharsetError(CodecError):
    pass

class ChecksumError(CodecError):
    pass


def normalize_nfkd(text: str) -> Tuple[bool, str]:
    """
    NFKD form of text, so pasted full-width or compatibility characters become plain ones.
    Returns (changed, normalized).
    """
    if unicodedata.is_normalized("NFKD", text):
        return False, text
    return True, unicodedata.normalize("NFKD", text)


def is_base58(text: str) -> bool:
    """True when every character of text is in the Base58 alphabet."""
    return all(c in BASE58_CHARS for c in text)


def b58decode(text: str) -> bytes:
    """Decode Base58 text without looking at any checksum."""
    if not is_base58(text):
        raise CharsetError("Input contains invalid base-58 characters.")
    return base58.b58decode(text)


def b58decode_check(text: str) -> bytes:
    """Decode Base58Check text and return the payload with the checksum stripped."""
    if not is_base58(text):
        raise CharsetError("Input contains invalid base-58 characters.")
    try:
        return base58.b58decode_check(text)
    except ValueError as e:
        raise ChecksumError(f"Invalid checksum: {e}") from e


def b58encode_check(payload: bytes) -> str:
    return base58.b58encode_check(payload).decode("ascii")


def bech32_decode(address: str) -> Tuple[bytes, int, str]:
    """
    Decode a Bech32 (not Bech32m) witness address.
    Returns (program, witness_version, hrp).
    """
    sep = address.rfind("1")
    if sep < 1 or any(c not in bech32.CHARSET for c in address[sep + 1:].lower()):
        raise CharsetError("Input contains invalid bech32 characters.")

    hrp, data, spec = bech32.bech32_decode(address)
    if hrp is None or not data:
        raise ChecksumError("Invalid bech32 checksum or format.")
    if spec != bech32.Encoding.BECH32:
        raise ChecksumError("Input uses bech32m, expected bech32.")

    program = bech32.convertbits(data[1:], 5, 8, False)
    if program is None:
        raise ChecksumError("Invalid bech32 data padding.")
    return bytes(program), data[0], hrp


def to_int(data: bytes) -> int:
    """Interpret bytes as an unsigned big-endian integer."""
    return int.from_bytes(data, "big", signed=False)


def _digest(algorithm: hashes.HashAlgorithm, data: bytes) -> bytes:
    h = hashes.Hash(algorithm)
    h.update(data)
    return h.finalize()


def sha256(data: bytes) -> bytes:
    return _digest(hashes.SHA256(), data)


def hash160(data: bytes) -> bytes:
    """RIPEMD-160 of SHA-256, as used by P2PKH addresses."""
    return _digest(hashes.RIPEMD160(), sha256(data))
