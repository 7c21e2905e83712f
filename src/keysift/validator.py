"""
Structural checks for decoded Bitcoin key material and addresses.

Payload-level functions expect a checksum-verified payload from the codec layer
and only look at lengths, version/flag bytes and the key integer range.
The check_* functions take the raw string and run the codec step first.
"""
from typing import Callable, Optional

from keysift import codec
from keysift.constants import (
    ADDR_BYTE_LEN,
    BECH32_HRP,
    BIP38_BYTE_LEN,
    BIP38_EC_BYTE,
    BIP38_FIRST_BYTE,
    BIP38_NON_EC_BYTE,
    MAX_PRIVATE_KEY,
    P2PKH_ADDR_FIRST_BYTE,
    P2SH_ADDR_FIRST_BYTE,
    PRIVKEY_COMP_BYTE_LEN,
    PRIVKEY_COMP_LAST_BYTE,
    PRIVKEY_FIRST_BYTE,
    PRIVKEY_UNCOMP_BYTE_LEN,
    WITNESS_V0_HASH_LEN,
)
from keysift.outcome import OutcomeKind, ValidationOutcome

RANGE_ERROR = "Invalid key integer value (outside of the range defined by secp256k1 curve)."


def is_scalar_in_range(data: bytes) -> bool:
    """True when data (at most 32 bytes, big-endian) is in [1, MAX_PRIVATE_KEY]."""
    if len(data) > 32:
        return False
    return 1 <= codec.to_int(data) <= MAX_PRIVATE_KEY


def validate_private_key_wif(payload: bytes) -> ValidationOutcome:
    if not payload:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_LENGTH, "The given key is empty.")
    if payload[0] != PRIVKEY_FIRST_BYTE:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PREFIX,
            f"Invalid first key byte (actual={payload[0]}, expected={PRIVKEY_FIRST_BYTE}).",
        )

    if len(payload) == PRIVKEY_UNCOMP_BYTE_LEN:
        if not is_scalar_in_range(payload[1:]):
            return ValidationOutcome.invalid(OutcomeKind.INVALID_RANGE, RANGE_ERROR)
        return ValidationOutcome.valid("The given key is a valid uncompressed private key.", payload[1:])

    if len(payload) == PRIVKEY_COMP_BYTE_LEN:
        if payload[-1] != PRIVKEY_COMP_LAST_BYTE:
            return ValidationOutcome.invalid(
                OutcomeKind.INVALID_LENGTH,
                f"Invalid compressed key last byte (actual={payload[-1]}, expected={PRIVKEY_COMP_LAST_BYTE}).",
            )
        if not is_scalar_in_range(payload[1:33]):
            return ValidationOutcome.invalid(OutcomeKind.INVALID_RANGE, RANGE_ERROR)
        return ValidationOutcome.valid("The given key is a valid compressed private key.", payload[1:33])

    return ValidationOutcome.invalid(
        OutcomeKind.INVALID_LENGTH,
        f"The given key length is invalid. actual = {len(payload)}, "
        f"expected = {PRIVKEY_UNCOMP_BYTE_LEN} (uncompressed) or {PRIVKEY_COMP_BYTE_LEN} (compressed).",
    )


def validate_address(payload: bytes) -> ValidationOutcome:
    if not payload or payload[0] not in (P2PKH_ADDR_FIRST_BYTE, P2SH_ADDR_FIRST_BYTE):
        return ValidationOutcome.invalid(OutcomeKind.INVALID_PREFIX, "The given address starts with an invalid byte.")
    if len(payload) != ADDR_BYTE_LEN:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_LENGTH,
            f"The given address byte length is invalid (actual={len(payload)}, expected={ADDR_BYTE_LEN}).",
        )

    script = "P2PKH" if payload[0] == P2PKH_ADDR_FIRST_BYTE else "P2SH"
    return ValidationOutcome.valid(
        f"The given address is a valid base-58 encoded address used for {script} scripts.",
        payload[1:],
    )


def validate_bip38(payload: bytes) -> ValidationOutcome:
    if len(payload) != BIP38_BYTE_LEN:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_LENGTH,
            f"The given BIP-38 string has an invalid byte length (actual={len(payload)}, expected={BIP38_BYTE_LEN}).",
        )
    if payload[0] != BIP38_FIRST_BYTE or payload[1] not in (BIP38_NON_EC_BYTE, BIP38_EC_BYTE):
        return ValidationOutcome.invalid(OutcomeKind.INVALID_PREFIX, "The given BIP-38 string has invalid starting bytes.")

    flavor = "EC-multiplied" if payload[1] == BIP38_EC_BYTE else "non-EC-multiplied"
    return ValidationOutcome.valid(f"The given BIP-38 string is valid ({flavor}).", payload)


def decode_witness_address(address: str) -> ValidationOutcome:
    """Decode a native v0 witness address and return its 20-byte hash as the payload."""
    try:
        program, witness_version, hrp = codec.bech32_decode(address)
    except codec.CharsetError as e:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_CHARACTER_SET, str(e))
    except codec.ChecksumError as e:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_CHECKSUM, str(e))

    if hrp != BECH32_HRP:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PREFIX,
            f"Invalid human readable part (actual={hrp}, expected={BECH32_HRP}).",
        )
    if witness_version != 0:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PREFIX,
            f"Invalid witness version (actual={witness_version}, expected=0).",
        )
    if len(program) != WITNESS_V0_HASH_LEN:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_LENGTH,
            f"Invalid witness program length (actual={len(program)}, expected={WITNESS_V0_HASH_LEN}).",
        )
    return ValidationOutcome.valid("The given address is a valid bech32 encoded P2WPKH address.", program)


def _check_base58(text: str, subject: str, validate: Callable[[bytes], ValidationOutcome]) -> ValidationOutcome:
    try:
        payload = codec.b58decode_check(text)
    except codec.CharsetError:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_CHARACTER_SET, f"The given {subject} contains invalid base-58 characters."
        )
    except codec.ChecksumError:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_CHECKSUM, f"The given {subject} has an invalid checksum.")
    return validate(payload)


def check_private_key(text: str) -> ValidationOutcome:
    return _check_base58(text, "key", validate_private_key_wif)


def check_address(text: str) -> ValidationOutcome:
    return _check_base58(text, "address", validate_address)


def check_bip38(text: str) -> ValidationOutcome:
    return _check_base58(text, "BIP-38 string", validate_bip38)


def get_address_hash(address: str, ignore_p2sh: bool = False) -> Optional[bytes]:
    """Return the 20-byte hash inside a base-58 or bech32 address, or None if it isn't one."""
    if not address or address.isspace():
        return None
    if address.startswith("3") and ignore_p2sh:
        return None

    if address.startswith(("1", "3")):
        outcome = check_address(address)
    elif address.startswith("bc1"):
        outcome = decode_witness_address(address)
    else:
        return None
    return outcome.payload if outcome.ok else None
