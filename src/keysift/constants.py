"""Network and format constants for Bitcoin mainnet key material."""

BASE58_CHARS = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# Characters a user may pick to mark unknown positions in a damaged key.
SYMBOLS = "!@#$%^&*_-+=?"
DEFAULT_MISSING_CHAR = "*"

PRIVKEY_FIRST_BYTE = 0x80
PRIVKEY_COMP_LAST_BYTE = 0x01
PRIVKEY_UNCOMP_BYTE_LEN = 33
PRIVKEY_COMP_BYTE_LEN = 34

PRIVKEY_COMP_WIF_LEN = 52
PRIVKEY_UNCOMP_WIF_LEN = 51
PRIVKEY_COMP_CHAR1 = "K"
PRIVKEY_COMP_CHAR2 = "L"
PRIVKEY_UNCOMP_CHAR = "5"

P2PKH_ADDR_FIRST_BYTE = 0x00
P2SH_ADDR_FIRST_BYTE = 0x05
ADDR_BYTE_LEN = 21

BECH32_HRP = "bc"
WITNESS_V0_HASH_LEN = 20

BIP38_BYTE_LEN = 39
BIP38_FIRST_BYTE = 0x01
BIP38_NON_EC_BYTE = 0x42
BIP38_EC_BYTE = 0x43

MINIKEY_LENGTHS = (22, 26, 30)
MINIKEY_FIRST_CHAR = "S"

# Inclusive upper bound for a private key integer.
MAX_PRIVATE_KEY = 115792089237316195423570985008687907852837564279074904382605163141518161494336
