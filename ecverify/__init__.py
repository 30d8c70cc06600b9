"""
ecverify - ECDSA signature verification for raw r || s signatures.

Verifies a fixed-width 64-byte ECDSA signature over an arbitrary payload using
a PEM-encoded elliptic-curve public key.

Quick Start:
    from ecverify import Verifier

    result = Verifier().verify(pem_bytes, raw_signature, b"hello world")
    if result.is_error:
        print(result.error.code)
    elif result.valid:
        print("signature ok")

    # (bool, error) pair
    from ecverify import verify_ecdsa_signature
    ok, err = verify_ecdsa_signature(pem_bytes, raw_signature, b"hello world")

Supported curves (digest): secp256r1, secp256k1, brainpoolP256r1 (SHA-256).
"""

from .codec import (
    COMPONENT_SIZE,
    RAW_SIGNATURE_SIZE,
    EncodedSignature,
    decode_signature,
    encode_signature,
)
from .config import VerifierConfig
from .curves import digest_for_curve, supported_curves
from .digest import compute_digest
from .exceptions import (
    DigestComputationError,
    ECVerifyError,
    ErrorKind,
    KeyImportError,
    MalformedSignatureError,
    ResourceExhaustedError,
    UnsupportedCurveError,
    UnsupportedKeyTypeError,
)
from .keys import KeyFamily, ParsedKey, import_public_key
from .verifier import (
    Verifier,
    VerifyResult,
    VerifyStatus,
    batch_verify_signatures,
    get_default_verifier,
    verify_ecdsa_signature,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "Verifier",
    "VerifyResult",
    "VerifyStatus",
    "VerifierConfig",
    "verify_ecdsa_signature",
    "batch_verify_signatures",
    "get_default_verifier",
    # Codec
    "EncodedSignature",
    "encode_signature",
    "decode_signature",
    "COMPONENT_SIZE",
    "RAW_SIGNATURE_SIZE",
    # Keys and digests
    "KeyFamily",
    "ParsedKey",
    "import_public_key",
    "digest_for_curve",
    "supported_curves",
    "compute_digest",
    # Exceptions
    "ECVerifyError",
    "ErrorKind",
    "MalformedSignatureError",
    "KeyImportError",
    "UnsupportedKeyTypeError",
    "UnsupportedCurveError",
    "DigestComputationError",
    "ResourceExhaustedError",
    # Version
    "__version__",
]
