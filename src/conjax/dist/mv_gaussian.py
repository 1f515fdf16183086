# conjax/dist/mv_gaussian.py
import jax.numpy as jnp
from jax import Array, random
from jax.typing import ArrayLike
from jax.scipy.stats import multivariate_normal

from conjax.core.base import Distribution, HasSuffStat
from conjax.core.checks import check_spd, check_vector
from conjax.data.suffstat import MvGaussianSuffStat


class MvGaussian(Distribution, HasSuffStat):
    """
    multivariate normal N(mu, cov)
    mu: mean vector (d,)
    cov: covariance matrix (d, d), symmetric positive definite
    """
    def __init__(self, mu: ArrayLike, cov: ArrayLike):
        mu = jnp.asarray(mu, dtype=float)
        cov = jnp.asarray(cov, dtype=float)
        check_vector("mu", mu)
        check_spd("cov", cov, size=mu.shape[0])
        self.mu = mu
        self.cov = cov

    @classmethod
    def standard(cls, ndims: int) -> "MvGaussian":
        return cls(jnp.zeros(ndims), jnp.eye(ndims))

    @property
    def ndims(self) -> int:
        return self.mu.shape[0]

    def ln_f(self, x: ArrayLike) -> Array:
        return multivariate_normal.logpdf(jnp.asarray(x), self.mu, self.cov)

    def draw(self, rng_key: Array) -> Array:
        return random.multivariate_normal(rng_key, self.mu, self.cov)

    def empty_suffstat(self) -> MvGaussianSuffStat:
        return MvGaussianSuffStat(self.ndims)

    def __repr__(self) -> str:
        return f"MvGaussian(mu={self.mu}, cov={self.cov})"
