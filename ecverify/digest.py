"""Message digest computation for the verification pipeline."""

from cryptography.exceptions import AlreadyFinalized, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

from .exceptions import DigestComputationError, ResourceExhaustedError


def compute_digest(message: bytes, algorithm: hashes.HashAlgorithm) -> bytes:
    """
    Hash a message with the given algorithm.

    A zero-length message is valid and yields the digest of zero bytes. A
    message that is not bytes-like cannot be fed to the digest context; it is
    rejected before the context is created and reported as a digest failure,
    since no other error kind covers the message input.

    Args:
        message: Bytes that were signed
        algorithm: Digest bound to the key's curve

    Returns:
        Digest bytes of ``algorithm.digest_size`` length

    Raises:
        DigestComputationError: If the digest context cannot be used
        ResourceExhaustedError: If the context cannot be allocated
    """
    if not isinstance(message, (bytes, bytearray, memoryview)):
        raise DigestComputationError(
            f"message must be bytes-like to be digested, got {type(message).__name__}",
            details={"message_type": type(message).__name__},
        )

    try:
        ctx = hashes.Hash(algorithm)
        ctx.update(bytes(message))
        return ctx.finalize()
    except MemoryError as e:
        raise ResourceExhaustedError("out of memory computing digest", cause=e) from e
    except (UnsupportedAlgorithm, AlreadyFinalized, TypeError) as e:
        name = getattr(algorithm, "name", type(algorithm).__name__)
        raise DigestComputationError(
            f"{name} digest failed: {e}",
            details={"algorithm": name},
            cause=e,
        ) from e
