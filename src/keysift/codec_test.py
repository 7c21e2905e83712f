import pytest

from keysift import codec


class TestBase58:
    """Test suite for the base-58 wrappers"""

    def test_is_base58(self):
        """Test alphabet membership, including the excluded look-alikes"""
        assert codec.is_base58("5HueCGU8")
        for c in "0OIl":
            assert not codec.is_base58(f"abc{c}")

    def test_b58decode_rejects_charset(self):
        """Test that characters outside the alphabet raise CharsetError"""
        with pytest.raises(codec.CharsetError):
            codec.b58decode("abc0")

    def test_b58decode_leading_ones(self):
        """Test that leading '1' characters decode to zero bytes"""
        assert codec.b58decode("11") == b"\x00\x00"

    def test_check_round_trip(self):
        """Test encode then decode of a P2PKH payload"""
        payload = bytes([0x00]) + bytes(range(20))
        text = codec.b58encode_check(payload)
        assert text.startswith("1")
        assert codec.b58decode_check(text) == payload

    def test_known_wif(self):
        """Test encoding of a well-known uncompressed WIF key"""
        payload = bytes([0x80]) + bytes.fromhex("0c28fca386c7a227600b2fe50b7cae11ec86d3bf1fbe471be89827e19d72aa1d")
        assert codec.b58encode_check(payload) == "5HueCGU8rMjxEXxiPuD5BDku4MkFqeZyd4dZ1jvhTVqvbTLvyTJ"

    def test_bad_checksum(self):
        """Test that a mangled character raises ChecksumError"""
        with pytest.raises(codec.ChecksumError):
            codec.b58decode_check("5HueCGU8rMjxEXxiPuD5BDku4MkFqeZyd4dZ1jvhTVqvbTLvyTK")

    def test_errors_are_value_errors(self):
        """Test the error hierarchy"""
        assert issubclass(codec.CharsetError, codec.CodecError)
        assert issubclass(codec.ChecksumError, codec.CodecError)
        assert issubclass(codec.CodecError, ValueError)


class TestBech32:
    """Test suite for the bech32 wrapper"""

    def test_decode_p2wpkh(self):
        """Test the reference P2WPKH address"""
        program, version, hrp = codec.bech32_decode("bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4")
        assert hrp == "bc"
        assert version == 0
        assert program.hex() == "751e76e8199196d454941c45d1b3a323f1433bd6"

    def test_decode_uppercase(self):
        """Test that an all-uppercase address decodes"""
        program, version, hrp = codec.bech32_decode("BC1QW508D6QEJXTDG4Y5R3ZARVARY0C5XW7KV8F3T4")
        assert hrp == "bc"
        assert len(program) == 20

    def test_invalid_character(self):
        """Test that 'b' (not in the bech32 charset) is rejected"""
        with pytest.raises(codec.CharsetError):
            codec.bech32_decode("bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3tb")

    def test_missing_separator(self):
        """Test input without a separator"""
        with pytest.raises(codec.CharsetError):
            codec.bech32_decode("qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4")

    def test_bad_checksum(self):
        """Test that a changed data character fails the checksum"""
        with pytest.raises(codec.ChecksumError):
            codec.bech32_decode("bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t5")


class TestHashes:
    """Test suite for hashing helpers"""

    def test_sha256(self):
        """Test SHA-256 of the empty string"""
        assert codec.sha256(b"").hex() == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_hash160(self):
        """Test RIPEMD-160(SHA-256) of the empty string"""
        assert codec.hash160(b"").hex() == "b472a266d0bd89c13706a4132ccfb16f7c3b9fcb"

    def test_to_int(self):
        """Test big-endian unsigned interpretation"""
        assert codec.to_int(b"\x01\x00") == 256
        assert codec.to_int(b"\xff") == 255
        assert codec.to_int(b"") == 0


class TestNormalizeNfkd:
    """Test suite for NFKD normalisation of pasted input"""

    def test_plain_ascii_unchanged(self):
        assert codec.normalize_nfkd("5HueCGU8") == (False, "5HueCGU8")

    def test_full_width_digits_and_letters(self):
        assert codec.normalize_nfkd("５Ｈue") == (True, "5Hue")

    def test_compatibility_ligature(self):
        assert codec.normalize_nfkd("ﬁ") == (True, "fi")

    def test_empty(self):
        assert codec.normalize_nfkd("") == (False, "")
