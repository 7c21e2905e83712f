from dataclasses import dataclass

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from keysift import codec
from keysift.constants import (
    MINIKEY_FIRST_CHAR,
    MINIKEY_LENGTHS,
    P2PKH_ADDR_FIRST_BYTE,
    PRIVKEY_COMP_LAST_BYTE,
    PRIVKEY_FIRST_BYTE,
)
from keysift.outcome import OutcomeKind, ValidationOutcome
from keysift.validator import RANGE_ERROR, is_scalar_in_range


@dataclass(frozen=True, slots=True)
class MiniKeyInfo:
    private_key: bytes
    wif_compressed: str
    wif_uncompressed: str
    address_compressed: str
    address_uncompressed: str

    def describe(self) -> str:
        return (
            "Compressed:\n"
            f"       WIF: {self.wif_compressed}\n"
            f"   Address: {self.address_compressed}\n"
            "Uncompressed:\n"
            f"         WIF: {self.wif_uncompressed}\n"
            f"     Address: {self.address_uncompressed}"
        )


def to_wif(private_key: bytes, compressed: bool) -> str:
    payload = bytes([PRIVKEY_FIRST_BYTE]) + private_key
    if compressed:
        payload += bytes([PRIVKEY_COMP_LAST_BYTE])
    return codec.b58encode_check(payload)


def public_key_bytes(private_key: bytes, compressed: bool) -> bytes:
    """secp256k1 public key in SEC1 form."""
    key = ec.derive_private_key(codec.to_int(private_key), ec.SECP256K1())
    fmt = serialization.PublicFormat.CompressedPoint if compressed else serialization.PublicFormat.UncompressedPoint
    return key.public_key().public_bytes(serialization.Encoding.X962, fmt)


def p2pkh_address(pubkey: bytes) -> str:
    return codec.b58encode_check(bytes([P2PKH_ADDR_FIRST_BYTE]) + codec.hash160(pubkey))


def check_mini_key(key: str) -> ValidationOutcome:
    """
    Validate a mini private key (Casascius style).
    The payload of a valid outcome is the 32-byte private key, sha256(key).
    """
    if len(key) not in MINIKEY_LENGTHS:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_LENGTH,
            f"Invalid mini key length (actual={len(key)}, expected one of {', '.join(map(str, MINIKEY_LENGTHS))}).",
        )
    if not codec.is_base58(key):
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_CHARACTER_SET, "The given mini key contains invalid base-58 characters."
        )
    if key[0] != MINIKEY_FIRST_CHAR:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PREFIX, f"Mini key must start with {MINIKEY_FIRST_CHAR}."
        )
    if codec.sha256(f"{key}?".encode("ascii"))[0] != 0:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_CHECKSUM, "The given mini key has an invalid checksum.")

    private_key = codec.sha256(key.encode("ascii"))
    if not is_scalar_in_range(private_key):
        return ValidationOutcome.invalid(OutcomeKind.INVALID_RANGE, RANGE_ERROR)
    return ValidationOutcome.valid(mini_key_info(private_key).describe(), private_key)


def mini_key_info(private_key: bytes) -> MiniKeyInfo:
    return MiniKeyInfo(
        private_key=private_key,
        wif_compressed=to_wif(private_key, True),
        wif_uncompressed=to_wif(private_key, False),
        address_compressed=p2pkh_address(public_key_bytes(private_key, True)),
        address_uncompressed=p2pkh_address(public_key_bytes(private_key, False)),
    )
