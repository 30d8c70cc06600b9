"""
Shared fixtures for ecverify tests.
"""

import pytest

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature


def _pem(private_key) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _der(private_key) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _sign_raw(private_key, message: bytes) -> bytes:
    der = private_key.sign(message, ec.ECDSA(hashes.SHA256()))
    r, s = decode_dss_signature(der)
    return r.to_bytes(32, "big") + s.to_bytes(32, "big")


@pytest.fixture
def p256_key():
    """Fresh P-256 private key."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def p256_pem(p256_key) -> bytes:
    return _pem(p256_key)


@pytest.fixture
def p256_der(p256_key) -> bytes:
    return _der(p256_key)


@pytest.fixture
def other_p256_pem() -> bytes:
    """PEM of an unrelated P-256 key."""
    return _pem(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture
def to_pem():
    return _pem


@pytest.fixture
def sign_raw():
    """Sign a message with SHA-256 ECDSA and return the raw r || s form."""
    return _sign_raw


@pytest.fixture
def hello_signature(p256_key) -> bytes:
    return _sign_raw(p256_key, b"hello world")
