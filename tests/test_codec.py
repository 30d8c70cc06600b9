"""
Tests for the signature codec.
"""

import os

import pytest

from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from ecverify.codec import (
    RAW_SIGNATURE_SIZE,
    EncodedSignature,
    decode_signature,
    encode_signature,
)
from ecverify.exceptions import ErrorKind, MalformedSignatureError


ONE = b"\x00" * 31 + b"\x01"


class TestEncode:
    """Tests for raw to DER encoding."""

    def test_encode_small_components(self):
        """Test that leading zeros are trimmed from the integers."""
        encoded = encode_signature(ONE + ONE)

        assert isinstance(encoded, EncodedSignature)
        assert encoded.r == 1
        assert encoded.s == 1
        assert encoded.der == b"\x30\x06\x02\x01\x01\x02\x01\x01"
        assert len(encoded) == 8

    def test_encode_high_bit_components(self):
        """Test that a set high bit gets a zero pad byte."""
        encoded = encode_signature(b"\xff" * 64)

        # SEQUENCE header + two INTEGERs of 33 bytes each
        assert len(encoded) == 2 + 2 * (2 + 33)
        assert encoded.der[4] == 0x00

    def test_encoding_size_is_data_dependent(self):
        """Test that different values give different DER sizes."""
        small = encode_signature(ONE + ONE)
        large = encode_signature(b"\xff" * 64)

        assert len(small) != len(large)

    def test_encode_is_deterministic(self):
        """Test that the same input always yields identical bytes."""
        raw = os.urandom(64)

        assert encode_signature(raw).der == encode_signature(raw).der

    def test_encode_accepts_bytearray_and_memoryview(self):
        """Test bytes-like inputs."""
        raw = os.urandom(64)

        assert encode_signature(bytearray(raw)) == encode_signature(raw)
        assert encode_signature(memoryview(raw)) == encode_signature(raw)

    def test_bytes_conversion(self):
        """Test that bytes() returns the DER encoding."""
        encoded = encode_signature(ONE + ONE)

        assert bytes(encoded) == encoded.der


class TestLengthGuard:
    """Tests for the 64-byte length check."""

    @pytest.mark.parametrize("length", [0, 1, 32, 63, 65, 128])
    def test_wrong_length_rejected(self, length):
        """Test that any length other than 64 is malformed."""
        with pytest.raises(MalformedSignatureError) as exc_info:
            encode_signature(b"\x01" * length)

        assert exc_info.value.kind is ErrorKind.MALFORMED_SIGNATURE
        assert exc_info.value.length == length
        assert exc_info.value.details["length"] == length

    def test_non_bytes_rejected(self):
        """Test that strings are not accepted as signatures."""
        with pytest.raises(MalformedSignatureError):
            encode_signature("a" * RAW_SIGNATURE_SIZE)

    def test_none_rejected(self):
        """Test that None is malformed, not a TypeError."""
        with pytest.raises(MalformedSignatureError):
            encode_signature(None)


class TestDecode:
    """Tests for DER to raw decoding."""

    def test_roundtrip_random(self):
        """Test Decode(Encode(raw)) == raw for random signatures."""
        for _ in range(50):
            raw = os.urandom(64)
            assert decode_signature(encode_signature(raw)) == raw

    def test_roundtrip_edge_values(self):
        """Test round-trip for leading-zero and all-ones components."""
        for raw in (ONE + ONE, b"\xff" * 64, ONE + b"\xff" * 32, b"\x80" + b"\x00" * 62 + b"\x01"):
            assert decode_signature(encode_signature(raw)) == raw

    def test_decode_plain_der_bytes(self):
        """Test decoding DER bytes directly."""
        der = encode_dss_signature(1, 2)

        raw = decode_signature(der)

        assert raw == ONE + b"\x00" * 31 + b"\x02"

    def test_wrong_outer_tag(self):
        """Test that a non-SEQUENCE tag is rejected."""
        with pytest.raises(MalformedSignatureError):
            decode_signature(b"\x31\x06\x02\x01\x01\x02\x01\x01")

    def test_wrong_inner_tag(self):
        """Test that a non-INTEGER component is rejected."""
        with pytest.raises(MalformedSignatureError):
            decode_signature(b"\x30\x06\x04\x01\x01\x02\x01\x01")

    def test_truncated(self):
        """Test that truncated DER is rejected."""
        der = encode_signature(os.urandom(64)).der

        with pytest.raises(MalformedSignatureError):
            decode_signature(der[:-1])

    def test_trailing_data(self):
        """Test that trailing bytes after the SEQUENCE are rejected."""
        der = encode_signature(os.urandom(64)).der

        with pytest.raises(MalformedSignatureError):
            decode_signature(der + b"\x00")

    def test_empty(self):
        """Test that empty input is rejected."""
        with pytest.raises(MalformedSignatureError):
            decode_signature(b"")

    def test_negative_component(self):
        """Test that a negative INTEGER is rejected."""
        with pytest.raises(MalformedSignatureError):
            decode_signature(b"\x30\x06\x02\x01\xff\x02\x01\x01")

    def test_component_too_wide(self):
        """Test that a component wider than 32 bytes is rejected."""
        der = encode_dss_signature(1 << 256, 1)

        with pytest.raises(MalformedSignatureError, match="32 bytes"):
            decode_signature(der)

    def test_non_bytes_rejected(self):
        """Test that strings are not accepted."""
        with pytest.raises(MalformedSignatureError):
            decode_signature("30060201010201")
