"""Cheap prechecks on damaged WIF keys before any candidate is generated from them."""
from keysift.constants import (
    BASE58_CHARS,
    PRIVKEY_COMP_CHAR1,
    PRIVKEY_COMP_CHAR2,
    PRIVKEY_COMP_WIF_LEN,
    PRIVKEY_UNCOMP_CHAR,
    PRIVKEY_UNCOMP_WIF_LEN,
    SYMBOLS,
)
from keysift.outcome import OutcomeKind, ValidationOutcome

COMP_FIRST_CHARS = (PRIVKEY_COMP_CHAR1, PRIVKEY_COMP_CHAR2)
FIRST_CHARS = COMP_FIRST_CHARS + (PRIVKEY_UNCOMP_CHAR,)

ACCEPTED = ValidationOutcome.valid("The given key can be searched.")


def is_missing_char_valid(c: str) -> bool:
    return len(c) == 1 and c in SYMBOLS


def can_be_private_key(key: str) -> ValidationOutcome:
    """Length and first character check for a complete WIF key."""
    if len(key) == PRIVKEY_COMP_WIF_LEN:
        if key[0] in COMP_FIRST_CHARS:
            return ACCEPTED
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PREFIX,
            f"A key with {len(key)} length is expected to start with {PRIVKEY_COMP_CHAR1} or {PRIVKEY_COMP_CHAR2}.",
        )
    if len(key) == PRIVKEY_UNCOMP_WIF_LEN:
        if key[0] == PRIVKEY_UNCOMP_CHAR:
            return ACCEPTED
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PREFIX,
            f"A key with {len(key)} length is expected to start with {PRIVKEY_UNCOMP_CHAR}.",
        )
    return ValidationOutcome.invalid(OutcomeKind.INVALID_LENGTH, "Given key has an invalid length.")


def classify_partial(key: str, missing_char: str) -> ValidationOutcome:
    """
    Decide whether a key with unknown characters is worth searching.
    Never checks the checksum or the key range; those need a complete candidate.
    """
    if not is_missing_char_valid(missing_char):
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PLACEHOLDER, f"Invalid missing character. Choose one from {SYMBOLS}"
        )
    if not key or key.isspace():
        return ValidationOutcome.invalid(OutcomeKind.INVALID_LENGTH, "Key can not be null or empty.")
    if not all(c == missing_char or c in BASE58_CHARS for c in key):
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_CHARACTER_SET,
            f"Key contains invalid base-58 characters (ignoring the missing char = {missing_char}).",
        )

    if missing_char in key:
        # Both the length and the first character must be known to be right.
        if len(key) == PRIVKEY_COMP_WIF_LEN:
            if key[0] not in COMP_FIRST_CHARS:
                return ValidationOutcome.invalid(
                    OutcomeKind.INVALID_PREFIX,
                    "Invalid first character for a compressed private key considering length.",
                )
        elif len(key) == PRIVKEY_UNCOMP_WIF_LEN:
            if key[0] != PRIVKEY_UNCOMP_CHAR:
                return ValidationOutcome.invalid(
                    OutcomeKind.INVALID_PREFIX,
                    "Invalid first character for an uncompressed private key considering length.",
                )
        else:
            return ValidationOutcome.invalid(OutcomeKind.INVALID_LENGTH, "Invalid key length.")
        return ACCEPTED

    # No placeholder: either a complete key the caller must validate in full,
    # or a key missing characters at unknown positions.
    if len(key) > PRIVKEY_COMP_WIF_LEN:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_LENGTH, "Key length is too big.")
    if len(key) == PRIVKEY_COMP_WIF_LEN and key[0] not in COMP_FIRST_CHARS:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_PREFIX, "Invalid first key character considering its length.")
    if len(key) == PRIVKEY_UNCOMP_WIF_LEN and key[0] != PRIVKEY_UNCOMP_CHAR:
        return ValidationOutcome.invalid(OutcomeKind.INVALID_PREFIX, "Invalid first key character considering its length.")
    if key[0] not in FIRST_CHARS:
        return ValidationOutcome.invalid(
            OutcomeKind.INVALID_PREFIX, "The first character of the given private key is not valid."
        )
    return ACCEPTED
