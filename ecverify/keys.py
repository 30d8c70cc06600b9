"""
Public key import.

Decodes a SubjectPublicKeyInfo container (PEM, or DER when allowed) into a
scoped handle tagged with its algorithm family. Only elliptic-curve keys on a
curve with a digest binding are accepted.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import (
    dsa,
    ec,
    ed448,
    ed25519,
    rsa,
    x448,
    x25519,
)

from .curves import CURVE_DIGESTS, digest_for_curve
from .exceptions import (
    KeyImportError,
    ResourceExhaustedError,
    UnsupportedCurveError,
    UnsupportedKeyTypeError,
)

logger = logging.getLogger(__name__)

PEM_MARKER = b"-----BEGIN"


class KeyFamily(str, Enum):
    """Algorithm family of a decoded public key."""

    EC = "EC"
    RSA = "RSA"
    DSA = "DSA"
    ED25519 = "ED25519"
    ED448 = "ED448"
    X25519 = "X25519"
    X448 = "X448"
    UNKNOWN = "UNKNOWN"


_FAMILIES = (
    (ec.EllipticCurvePublicKey, KeyFamily.EC),
    (rsa.RSAPublicKey, KeyFamily.RSA),
    (dsa.DSAPublicKey, KeyFamily.DSA),
    (ed25519.Ed25519PublicKey, KeyFamily.ED25519),
    (ed448.Ed448PublicKey, KeyFamily.ED448),
    (x25519.X25519PublicKey, KeyFamily.X25519),
    (x448.X448PublicKey, KeyFamily.X448),
)


def key_family(key: object) -> KeyFamily:
    """Classify a loaded ``cryptography`` public key."""
    for key_cls, family in _FAMILIES:
        if isinstance(key, key_cls):
            return family
    return KeyFamily.UNKNOWN


class ParsedKey:
    """
    Elliptic-curve public key handle scoped to one verification.

    Usage:
        with import_public_key(pem) as parsed:
            parsed.key.verify(...)
        # handle is released on exit, on every path
    """

    def __init__(self, key: ec.EllipticCurvePublicKey):
        self._key: Optional[ec.EllipticCurvePublicKey] = key
        self.family = KeyFamily.EC
        self.curve_name: str = key.curve.name
        self.key_size: int = key.curve.key_size

    @property
    def key(self) -> ec.EllipticCurvePublicKey:
        if self._key is None:
            raise KeyImportError("public key handle has been released")
        return self._key

    @property
    def released(self) -> bool:
        return self._key is None

    def digest_algorithm(self) -> hashes.HashAlgorithm:
        """Digest bound to this key's curve."""
        return digest_for_curve(self.curve_name)

    def release(self) -> None:
        """Drop the reference to the underlying key object."""
        self._key = None

    def __enter__(self) -> "ParsedKey":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"ParsedKey(curve={self.curve_name!r}, {state})"


def _load(data: bytes, accept_der: bool):
    # PEM may carry descriptive text before the armour line
    if PEM_MARKER in data:
        return serialization.load_pem_public_key(data)
    if not accept_der:
        raise KeyImportError("public key is not a PEM container")
    return serialization.load_der_public_key(data)


def import_public_key(
    data: bytes,
    accept_der: bool = True,
    allowed_curves: Optional[Iterable[str]] = None,
) -> ParsedKey:
    """
    Import an elliptic-curve public key.

    Args:
        data: PEM (``-----BEGIN PUBLIC KEY-----``) or DER SubjectPublicKeyInfo
        accept_der: Whether non-PEM input is tried as DER
        allowed_curves: Curve names to accept (default: every bound curve)

    Returns:
        ParsedKey handle, to be used as a context manager

    Raises:
        KeyImportError: If the container cannot be parsed
        UnsupportedKeyTypeError: If the key is not an elliptic-curve key
        UnsupportedCurveError: If the curve is unbound or not allowed
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise KeyImportError(f"public key must be bytes-like, got {type(data).__name__}")
    data = bytes(data)
    if not data:
        raise KeyImportError("public key is empty")

    try:
        key = _load(data, accept_der)
    except MemoryError as e:
        raise ResourceExhaustedError("out of memory loading public key", cause=e) from e
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyImportError(f"failed to load public key: {e}", cause=e) from e

    family = key_family(key)
    if family is not KeyFamily.EC:
        raise UnsupportedKeyTypeError(
            f"public key is {family.value}, expected EC", key_type=family.value
        )

    curve_name = key.curve.name
    allowed = set(CURVE_DIGESTS if allowed_curves is None else allowed_curves)
    if curve_name not in CURVE_DIGESTS or curve_name not in allowed:
        raise UnsupportedCurveError(
            f"curve {curve_name} is not supported", curve=curve_name
        )

    logger.debug(f"Imported EC public key on {curve_name}")
    return ParsedKey(key)
