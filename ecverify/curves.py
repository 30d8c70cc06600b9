"""
Curve to digest binding.

The raw signature format carries two 32-byte components, so only curves whose
group order fits in 256 bits are verifiable. Each of them is paired with a
fixed digest; the signer must have used the same one.
"""

from typing import Callable

from cryptography.hazmat.primitives import hashes

from .exceptions import UnsupportedCurveError


CURVE_DIGESTS: dict[str, Callable[[], hashes.HashAlgorithm]] = {
    "secp256r1": hashes.SHA256,
    "secp256k1": hashes.SHA256,
    "brainpoolP256r1": hashes.SHA256,
}


def supported_curves() -> list[str]:
    """Names of curves that have a digest binding."""
    return list(CURVE_DIGESTS)


def digest_for_curve(curve_name: str) -> hashes.HashAlgorithm:
    """
    Get the digest algorithm bound to a curve.

    Args:
        curve_name: Curve name as reported by ``cryptography`` (e.g. "secp256r1")

    Returns:
        New HashAlgorithm instance

    Raises:
        UnsupportedCurveError: If the curve has no binding
    """
    factory = CURVE_DIGESTS.get(curve_name)
    if factory is None:
        raise UnsupportedCurveError(
            f"no digest binding for curve {curve_name}", curve=curve_name
        )
    return factory()
