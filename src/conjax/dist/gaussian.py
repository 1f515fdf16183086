# conjax/dist/gaussian.py
from dataclasses import dataclass
from typing import Union

from jax import Array, random
from jax.typing import ArrayLike
from jax.scipy.stats import norm

from conjax.core.base import Distribution, HasSuffStat
from conjax.core.checks import check_finite, check_positive
from conjax.data.suffstat import GaussianSuffStat


@dataclass(frozen=True, eq=False)
class Gaussian(Distribution, HasSuffStat):
    """
    univariate normal N(mu, sigma^2)
    mu: mean
    sigma: standard deviation
    """
    mu: Union[float, Array] = 0.0
    sigma: Union[float, Array] = 1.0

    def __post_init__(self):
        check_finite("mu", self.mu)
        check_positive("sigma", self.sigma)

    @classmethod
    def standard(cls) -> "Gaussian":
        return cls(0.0, 1.0)

    def ln_f(self, x: ArrayLike) -> Array:
        return norm.logpdf(x, loc=self.mu, scale=self.sigma)

    def draw(self, rng_key: Array) -> Array:
        return self.mu + self.sigma * random.normal(rng_key)

    def empty_suffstat(self) -> GaussianSuffStat:
        return GaussianSuffStat()
