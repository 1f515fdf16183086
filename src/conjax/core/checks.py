# conjax/core/checks.py
# Hyperparameter validation. Every check raises InvalidParameter naming the
# parameter and runs on concrete (non-traced) values.
import logging

import jax.numpy as jnp
from jax.typing import ArrayLike

from conjax.errors import InvalidParameter

logger = logging.getLogger(__name__)


def _fail(name: str, reason: str) -> InvalidParameter:
    logger.debug("invalid parameter %s: %s", name, reason)
    return InvalidParameter(name, reason)


def check_finite(name: str, value: ArrayLike) -> None:
    if not bool(jnp.all(jnp.isfinite(jnp.asarray(value)))):
        raise _fail(name, "must be finite")


def check_positive(name: str, value: ArrayLike) -> None:
    check_finite(name, value)
    if not bool(jnp.all(jnp.asarray(value) > 0)):
        raise _fail(name, "must be in (0, ∞)")


def check_probability(name: str, value: ArrayLike) -> None:
    check_finite(name, value)
    value = jnp.asarray(value)
    if not bool(jnp.all((value >= 0) & (value <= 1))):
        raise _fail(name, "must be in [0, 1]")


def check_vector(name: str, value: ArrayLike, size: int = None) -> None:
    value = jnp.asarray(value)
    if value.ndim != 1 or value.shape[0] == 0:
        raise _fail(name, f"must be a non-empty vector, got shape {value.shape}")
    if size is not None and value.shape[0] != size:
        raise _fail(name, f"must have length {size}, got {value.shape[0]}")
    check_finite(name, value)


def check_spd(name: str, value: ArrayLike, size: int = None) -> None:
    """
    symmetric positive definite check: square, finite, symmetric up to
    rounding and with a Cholesky factor
    """
    value = jnp.asarray(value)
    if value.ndim != 2 or value.shape[0] != value.shape[1]:
        raise _fail(name, f"must be a square matrix, got shape {value.shape}")
    if size is not None and value.shape[0] != size:
        raise _fail(name, f"must be {size}x{size}, got {value.shape}")
    check_finite(name, value)
    if not bool(jnp.allclose(value, value.T)):
        raise _fail(name, "must be symmetric")
    chol = jnp.linalg.cholesky(value)
    if not bool(jnp.all(jnp.isfinite(chol))):
        raise _fail(name, "must be positive definite")
