"""
ecverify Configuration.

Provides sensible defaults with override capability. Nothing is read from the
environment unless ``VerifierConfig.from_env()`` is called explicitly.
"""

import logging
import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .curves import CURVE_DIGESTS

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_curves(value: str) -> list[str]:
    return [c.strip() for c in value.split(",") if c.strip()]


class VerifierConfig(BaseModel):
    """
    Configuration for a Verifier.

    Environment variables (ECVERIFY_* prefix) apply only through from_env().
    """

    # Keys
    allowed_curves: list[str] = Field(default_factory=lambda: list(CURVE_DIGESTS))
    accept_der_keys: bool = True

    # Batch verification
    batch_parallel_threshold: int = Field(default=4, ge=0)
    max_workers: Optional[int] = Field(default=None, gt=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("allowed_curves")
    @classmethod
    def validate_curves(cls, v: list[str]) -> list[str]:
        """Every allowed curve must have a digest binding."""
        if not v:
            raise ValueError("allowed_curves must not be empty")
        unknown = [c for c in v if c not in CURVE_DIGESTS]
        if unknown:
            raise ValueError(f"no digest binding for curves: {', '.join(unknown)}")
        return v

    @classmethod
    def from_env(cls, **overrides: Any) -> "VerifierConfig":
        """Create config with ECVERIFY_* environment variables applied."""
        env_map = {
            "ECVERIFY_ALLOWED_CURVES": ("allowed_curves", _parse_curves),
            "ECVERIFY_ACCEPT_DER_KEYS": ("accept_der_keys", _parse_bool),
            "ECVERIFY_BATCH_PARALLEL_THRESHOLD": ("batch_parallel_threshold", int),
            "ECVERIFY_MAX_WORKERS": ("max_workers", int),
        }

        values: dict[str, Any] = {}
        for env_var, (attr, type_fn) in env_map.items():
            value = os.environ.get(env_var)
            if value is not None:
                values[attr] = type_fn(value)
                logger.debug(f"Applied {env_var} to {attr}")
        values.update(overrides)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Export config to dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VerifierConfig":
        """Create config from dictionary."""
        return cls.model_validate(data)

    @classmethod
    def strict(cls) -> "VerifierConfig":
        """P-256 keys in PEM containers only."""
        return cls(allowed_curves=["secp256r1"], accept_der_keys=False)

    @classmethod
    def permissive(cls) -> "VerifierConfig":
        """Every bound curve, PEM or DER keys."""
        return cls()
