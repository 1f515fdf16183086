# conjax/core/math.py
import math
from typing import Union

import jax.numpy as jnp
from jax import Array
from jax.scipy.special import gammaln, multigammaln

# ln(2π)
LN_2PI = 1.8378770664093453
# 0.5 ln(2π)
HALF_LN_2PI = 0.9189385332046727
LN_2 = math.log(2.0)


def lnmv_gamma(d: int, a: Union[float, Array]) -> Array:
    """log of the d-dimensional multivariate gamma function Γ_d(a)"""
    return multigammaln(a, d)


def multivariate_t_logpdf(x: Array, loc: Array, scale: Array, df: Union[float, Array]) -> Array:
    """
    Log PDF of the multivariate Student-t distribution at a single point.

    Args:
        x: observation (d,)
        loc: mean vector (d,)
        scale: scale matrix (d, d)
        df: degrees of freedom > 0

    Returns:
        scalar log density
    """
    x = jnp.atleast_1d(x)
    loc = jnp.atleast_1d(loc)
    d = x.shape[0]

    logdet = jnp.linalg.slogdet(scale)[1]
    log_norm = (
            gammaln((df + d) / 2)
            - gammaln(df / 2)
            - 0.5 * (d * jnp.log(df * jnp.pi) + logdet)
    )
    dev = x - loc
    maha = dev @ jnp.linalg.solve(scale, dev)
    return log_norm - 0.5 * (df + d) * jnp.log1p(maha / df)
