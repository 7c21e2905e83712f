from keysift.minikey import check_mini_key, mini_key_info, public_key_bytes, to_wif
from keysift.outcome import OutcomeKind
from keysift.validator import check_address, check_private_key

MINI_KEY = "S6c56bnXQiBjk9mqSYE7ykVQ7NzrRy"
MINI_PRIVATE_KEY = "4c7a9640c72dc2099f23715d0c8a0d8a35f8906e3cab61dd3f78b67bf887c9ab"


class TestCheckMiniKey:
    """Test suite for mini private keys"""

    def test_valid(self):
        outcome = check_mini_key(MINI_KEY)
        assert outcome.ok
        assert outcome.payload.hex() == MINI_PRIVATE_KEY
        assert "Compressed:" in outcome.message
        assert "Uncompressed:" in outcome.message

    def test_derived_values_are_valid(self):
        """Test that the derived WIF keys and addresses pass their own checks"""
        info = mini_key_info(bytes.fromhex(MINI_PRIVATE_KEY))
        assert check_private_key(info.wif_compressed).ok
        assert check_private_key(info.wif_uncompressed).ok
        assert info.wif_uncompressed.startswith("5")
        assert info.wif_compressed[0] in "KL"
        assert check_address(info.address_compressed).ok
        assert check_address(info.address_uncompressed).ok
        assert info.address_compressed != info.address_uncompressed

    def test_length(self):
        outcome = check_mini_key(MINI_KEY[:-1])
        assert outcome.kind is OutcomeKind.INVALID_LENGTH

    def test_first_char(self):
        outcome = check_mini_key("T" + MINI_KEY[1:])
        assert outcome.kind is OutcomeKind.INVALID_PREFIX

    def test_charset(self):
        outcome = check_mini_key(MINI_KEY[:-1] + "0")
        assert outcome.kind is OutcomeKind.INVALID_CHARACTER_SET

    def test_checksum(self):
        outcome = check_mini_key(MINI_KEY[:-1] + "z")
        assert outcome.kind is OutcomeKind.INVALID_CHECKSUM


class TestKeyHelpers:
    """Test suite for WIF and public key helpers"""

    def test_to_wif(self):
        key = bytes.fromhex("0c28fca386c7a227600b2fe50b7cae11ec86d3bf1fbe471be89827e19d72aa1d")
        assert to_wif(key, False) == "5HueCGU8rMjxEXxiPuD5BDku4MkFqeZyd4dZ1jvhTVqvbTLvyTJ"
        assert len(to_wif(key, True)) == 52

    def test_public_key_of_one(self):
        """Test that the key 1 maps to the curve generator point"""
        key = (1).to_bytes(32, "big")
        assert public_key_bytes(key, True).hex() == (
            "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
        )
        uncompressed = public_key_bytes(key, False)
        assert len(uncompressed) == 65
        assert uncompressed[0] == 0x04
