"""
Signature codec.

Converts between the fixed-width raw ECDSA signature (r || s, 32 bytes each,
big-endian) and the DER ``SEQUENCE { INTEGER r, INTEGER s }`` structure the
verification primitive consumes.
"""

from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .exceptions import MalformedSignatureError, ResourceExhaustedError

COMPONENT_SIZE = 32
RAW_SIGNATURE_SIZE = 2 * COMPONENT_SIZE

_MAX_COMPONENT = (1 << (8 * COMPONENT_SIZE)) - 1

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class EncodedSignature:
    """DER-encoded signature together with the integers it carries."""

    der: bytes
    r: int
    s: int

    def __len__(self) -> int:
        return len(self.der)

    def __bytes__(self) -> bytes:
        return self.der


def _as_bytes(data: object, what: str) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise MalformedSignatureError(
        f"{what} must be bytes-like, got {type(data).__name__}"
    )


def encode_signature(raw: BytesLike) -> EncodedSignature:
    """
    Encode a raw 64-byte signature as DER.

    Args:
        raw: r (32 bytes) followed by s (32 bytes), both unsigned big-endian

    Returns:
        EncodedSignature whose size depends on the values of r and s

    Raises:
        MalformedSignatureError: If raw is not exactly 64 bytes
        ResourceExhaustedError: If the encoding could not be allocated
    """
    data = _as_bytes(raw, "signature")
    if len(data) != RAW_SIGNATURE_SIZE:
        raise MalformedSignatureError(
            f"signature must be {RAW_SIGNATURE_SIZE} bytes, got {len(data)}",
            length=len(data),
        )

    r = int.from_bytes(data[:COMPONENT_SIZE], "big")
    s = int.from_bytes(data[COMPONENT_SIZE:], "big")

    try:
        der = encode_dss_signature(r, s)
    except MemoryError as e:
        raise ResourceExhaustedError("out of memory encoding signature", cause=e) from e
    except ValueError as e:
        raise MalformedSignatureError(f"cannot encode signature: {e}", cause=e) from e

    return EncodedSignature(der=der, r=r, s=s)


def decode_signature(encoded: Union[EncodedSignature, BytesLike]) -> bytes:
    """
    Decode a DER signature back to its raw 64-byte form.

    Args:
        encoded: EncodedSignature or DER bytes

    Returns:
        r || s as two 32-byte big-endian integers

    Raises:
        MalformedSignatureError: On a wrong tag, truncated or trailing data,
            a negative component, or a component wider than 32 bytes
    """
    if isinstance(encoded, EncodedSignature):
        der = encoded.der
    else:
        der = _as_bytes(encoded, "encoded signature")

    try:
        r, s = decode_dss_signature(der)
    except MemoryError as e:
        raise ResourceExhaustedError("out of memory decoding signature", cause=e) from e
    except ValueError as e:
        raise MalformedSignatureError(f"invalid DER signature: {e}", cause=e) from e

    for name, value in (("r", r), ("s", s)):
        if value < 0:
            raise MalformedSignatureError(f"signature component {name} is negative")
        if value > _MAX_COMPONENT:
            raise MalformedSignatureError(
                f"signature component {name} does not fit in {COMPONENT_SIZE} bytes"
            )

    return r.to_bytes(COMPONENT_SIZE, "big") + s.to_bytes(COMPONENT_SIZE, "big")
