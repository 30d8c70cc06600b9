"""
ECDSA signature verification.

This module provides:
- Verifier: key import, curve/digest binding and ECDSA verification
- VerifyResult: three-valued outcome (valid, invalid, error)
- Module helpers backed by a lazily created process-wide Verifier
"""

import concurrent.futures
import logging
import threading
from enum import Enum
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed
from pydantic import BaseModel, ConfigDict

from .codec import EncodedSignature, encode_signature
from .config import VerifierConfig
from .digest import compute_digest
from .exceptions import ECVerifyError, ResourceExhaustedError
from .keys import ParsedKey, import_public_key

logger = logging.getLogger(__name__)


class VerifyStatus(str, Enum):
    """Outcome of a verification."""

    VALID = "valid"
    INVALID = "invalid"
    ERROR = "error"


class VerifyResult(BaseModel):
    """
    Result of one verification.

    ``INVALID`` means the signature was checked and rejected. ``ERROR`` means
    it could not be checked; ``error`` then holds the reason.
    """

    status: VerifyStatus
    error: Optional[ECVerifyError] = None
    curve: Optional[str] = None
    digest: Optional[str] = None

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @property
    def valid(self) -> bool:
        return self.status is VerifyStatus.VALID

    @property
    def is_error(self) -> bool:
        return self.status is VerifyStatus.ERROR

    def as_tuple(self) -> tuple[bool, Optional[ECVerifyError]]:
        """(validity, error) pair; a non-None error means nothing was checked."""
        return self.valid, self.error

    def raise_for_error(self) -> None:
        """Re-raise the stored error, if any."""
        if self.error is not None:
            raise self.error

    def __repr__(self) -> str:
        code = self.error.code if self.error else None
        return f"VerifyResult(status={self.status.value}, curve={self.curve}, error={code})"


class Verifier:
    """
    Verifies raw 64-byte ECDSA signatures against PEM/DER public keys.

    A Verifier holds only its configuration, so one instance can be shared
    across threads. Every call owns its key handle, digest and encoding.

    Usage:
        verifier = Verifier()
        result = verifier.verify(pem_bytes, raw_signature, b"hello world")
        if result.valid:
            ...
    """

    def __init__(self, config: Optional[VerifierConfig] = None):
        self.config = config or VerifierConfig()

    def _check(
        self,
        parsed: ParsedKey,
        encoded: EncodedSignature,
        message: bytes,
    ) -> VerifyResult:
        algorithm = parsed.digest_algorithm()
        digest = compute_digest(message, algorithm)

        try:
            parsed.key.verify(encoded.der, digest, ec.ECDSA(Prehashed(algorithm)))
        except InvalidSignature:
            status = VerifyStatus.INVALID
        except MemoryError as e:
            raise ResourceExhaustedError("out of memory during verification", cause=e) from e
        else:
            status = VerifyStatus.VALID

        logger.debug(
            f"ECDSA verification on {parsed.curve_name}/{algorithm.name}: {status.value}"
        )
        return VerifyResult(status=status, curve=parsed.curve_name, digest=algorithm.name)

    def verify_or_raise(self, public_key: bytes, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature, raising when it cannot be checked.

        Args:
            public_key: PEM (or DER) SubjectPublicKeyInfo of an EC key
            signature: Raw 64-byte r || s signature
            message: The exact bytes that were signed

        Returns:
            True if the signature is valid, False if it was checked and rejected

        Raises:
            ECVerifyError: If the signature could not be checked
        """
        encoded = encode_signature(signature)
        with import_public_key(
            public_key,
            accept_der=self.config.accept_der_keys,
            allowed_curves=self.config.allowed_curves,
        ) as parsed:
            return self._check(parsed, encoded, message).valid

    def verify(self, public_key: bytes, signature: bytes, message: bytes) -> VerifyResult:
        """
        Verify a signature.

        Never raises for malformed input; failures are reported as an
        ``ERROR`` result carrying the exception.

        Args:
            public_key: PEM (or DER) SubjectPublicKeyInfo of an EC key
            signature: Raw 64-byte r || s signature
            message: The exact bytes that were signed

        Returns:
            VerifyResult
        """
        try:
            encoded = encode_signature(signature)
            with import_public_key(
                public_key,
                accept_der=self.config.accept_der_keys,
                allowed_curves=self.config.allowed_curves,
            ) as parsed:
                return self._check(parsed, encoded, message)
        except MemoryError as e:
            error: ECVerifyError = ResourceExhaustedError(
                "out of memory during verification", cause=e
            )
        except ECVerifyError as e:
            error = e

        logger.info(f"Signature could not be verified: {error.code}: {error.message}")
        return VerifyResult(status=VerifyStatus.ERROR, error=error)

    def verify_batch(
        self,
        items: list[tuple[bytes, bytes, bytes]],
        parallel: bool = True,
    ) -> list[VerifyResult]:
        """
        Verify multiple independent signatures.

        Args:
            items: List of (public_key, signature, message) tuples
            parallel: Whether large batches use a thread pool

        Returns:
            One VerifyResult per item, in input order
        """
        if not items:
            return []

        if not parallel or len(items) <= self.config.batch_parallel_threshold:
            return [self.verify(pk, sig, msg) for pk, sig, msg in items]

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self.config.max_workers
        ) as executor:
            futures = [
                executor.submit(self.verify, pk, sig, msg)
                for pk, sig, msg in items
            ]
            return [f.result() for f in futures]


_default_verifier: Optional[Verifier] = None
_default_lock = threading.Lock()


def get_default_verifier() -> Verifier:
    """Process-wide Verifier with default config, created on first use."""
    global _default_verifier
    if _default_verifier is None:
        with _default_lock:
            if _default_verifier is None:
                _default_verifier = Verifier()
    return _default_verifier


def verify_ecdsa_signature(
    public_key: bytes,
    signature: bytes,
    data: bytes,
) -> tuple[bool, Optional[ECVerifyError]]:
    """
    Verify data against a raw ECDSA signature and a PEM public key.

    Args:
        public_key: PEM-encoded EC public key
        signature: Raw 64-byte r || s signature
        data: The data that was signed

    Returns:
        (True, None) if valid, (False, None) if rejected,
        (False, error) if the signature could not be checked
    """
    return get_default_verifier().verify(public_key, signature, data).as_tuple()


def batch_verify_signatures(
    items: list[tuple[bytes, bytes, bytes]],
    parallel: bool = True,
    max_workers: Optional[int] = None,
) -> list[bool]:
    """
    Verify many signatures, counting errors as failures.

    Args:
        items: List of (public_key, signature, data) tuples
        parallel: Whether to verify in parallel
        max_workers: Max parallel workers (default: CPU count)

    Returns:
        List of verification results (True/False for each)
    """
    verifier = get_default_verifier()
    if max_workers is not None:
        verifier = Verifier(verifier.config.model_copy(update={"max_workers": max_workers}))
    return [r.valid for r in verifier.verify_batch(items, parallel=parallel)]
