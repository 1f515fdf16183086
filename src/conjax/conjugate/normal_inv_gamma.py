# conjax/conjugate/normal_inv_gamma.py
import logging
from typing import NamedTuple, Tuple, Union

import jax.numpy as jnp
from jax import Array, random
from jax.typing import ArrayLike
from jax.scipy.special import gammaln
from jax.scipy.stats import norm

from conjax.conjugate.base import ConjugatePrior, conjugate_to
from conjax.core.checks import check_finite, check_positive
from conjax.core.math import HALF_LN_2PI, LN_2PI
from conjax.data.suffstat import GaussianSuffStat
from conjax.data.view import DataLike, DataOrSuffStat, as_data, extract_stat_then
from conjax.dist.gaussian import Gaussian

logger = logging.getLogger(__name__)

Scalar = Union[float, Array]


def ln_z(kappa: Scalar, alpha: Scalar, beta: Scalar) -> Array:
    """log normalizer, ln Γ(alpha) - alpha ln(beta) + 0.5 ln(2π / kappa)"""
    return gammaln(alpha) - alpha * jnp.log(beta) + HALF_LN_2PI - 0.5 * jnp.log(kappa)


class NigLnPpCache(NamedTuple):
    posterior: "NormalInvGamma"
    ln_z: Array


@conjugate_to(Gaussian)
class NormalInvGamma(ConjugatePrior):
    """
    Normal-Inverse-Gamma prior on the mean and variance of a Gaussian:
        sigma2 ~ InvGamma(alpha, beta),  mu | sigma2 ~ N(mu0, sigma2 / kappa)
    note: beta is a rate parameter
    """
    def __init__(self, mu: Scalar, kappa: Scalar, alpha: Scalar, beta: Scalar):
        check_finite("mu", mu)
        check_positive("kappa", kappa)
        check_positive("alpha", alpha)
        check_positive("beta", beta)
        self._mu = mu
        self._kappa = kappa
        self._alpha = alpha
        self._beta = beta

    @classmethod
    def _unchecked(cls, mu, kappa, alpha, beta) -> "NormalInvGamma":
        obj = cls.__new__(cls)
        obj._mu = mu
        obj._kappa = kappa
        obj._alpha = alpha
        obj._beta = beta
        return obj

    @property
    def mu(self) -> Scalar:
        return self._mu

    @property
    def kappa(self) -> Scalar:
        return self._kappa

    @property
    def alpha(self) -> Scalar:
        return self._alpha

    @property
    def beta(self) -> Scalar:
        return self._beta

    def __repr__(self) -> str:
        return f"NormalInvGamma(mu={self._mu}, kappa={self._kappa}, alpha={self._alpha}, beta={self._beta})"

    def ln_z(self) -> Array:
        return ln_z(self._kappa, self._alpha, self._beta)

    def ln_f(self, fx: Gaussian) -> Array:
        """joint log density of (fx.mu, fx.sigma^2)"""
        sigma2 = fx.sigma ** 2
        ln_mu = norm.logpdf(fx.mu, loc=self._mu, scale=jnp.sqrt(sigma2 / self._kappa))
        ln_sigma2 = (
                self._alpha * jnp.log(self._beta)
                - gammaln(self._alpha)
                - (self._alpha + 1) * jnp.log(sigma2)
                - self._beta / sigma2
        )
        return ln_mu + ln_sigma2

    def draw(self, rng_key: Array) -> Gaussian:
        key1, key2 = random.split(rng_key)
        sigma2 = self._beta / random.gamma(key1, self._alpha)
        mu = random.normal(key2) * jnp.sqrt(sigma2 / self._kappa) + self._mu
        return Gaussian(mu, jnp.sqrt(sigma2))

    def mean_(self) -> dict:
        if self._alpha > 1:
            mean_sigma2 = self._beta / (self._alpha - 1)
        else:
            mean_sigma2 = jnp.nan
        return {
            "mu": self._mu,
            "sigma2": mean_sigma2,
        }

    def variance_(self) -> dict:
        if self._alpha > 1:
            var_mu = self._beta / (self._kappa * (self._alpha - 1))
        else:
            var_mu = jnp.nan
        if self._alpha > 2:
            var_sigma2 = self._beta ** 2 / ((self._alpha - 2) * (self._alpha - 1) ** 2)
        else:
            var_sigma2 = jnp.nan
        return {
            "mu": var_mu,
            "sigma2": var_sigma2,
        }

    def posterior(self, x: DataLike) -> "NormalInvGamma":
        x = as_data(x)
        if x.n() == 0:
            return self._unchecked(self._mu, self._kappa, self._alpha, self._beta)
        return extract_stat_then(x, GaussianSuffStat, self._posterior_from_stat)

    def _posterior_from_stat(self, stat: GaussianSuffStat) -> "NormalInvGamma":
        n = stat.n()
        sample_mean = stat.sum_x / n
        sum_sq_diff = stat.sum_x_sq - n * sample_mean ** 2

        kappa_n = self._kappa + n
        mu_n = (self._kappa * self._mu + stat.sum_x) / kappa_n
        alpha_n = self._alpha + n / 2
        beta_n = self._beta + 0.5 * sum_sq_diff + \
                 0.5 * self._kappa * n * (sample_mean - self._mu) ** 2 / kappa_n

        logger.debug("NormalInvGamma posterior from n=%d observations", n)
        return self._unchecked(mu_n, kappa_n, alpha_n, beta_n)

    def ln_m_cache(self) -> Array:
        return self.ln_z()

    def ln_m_with_cache(self, cache: Array, x: DataLike) -> Array:
        x = as_data(x)
        zn = self.posterior(x).ln_z()
        return zn - cache - x.n() / 2.0 * LN_2PI

    def ln_pp_cache(self, x: DataLike) -> NigLnPpCache:
        post = self.posterior(x)
        return NigLnPpCache(post, post.ln_z())

    def ln_pp_with_cache(self, cache: NigLnPpCache, y: ArrayLike) -> Array:
        y_stat = GaussianSuffStat()
        y_stat.observe(y)
        pred = cache.posterior.posterior(DataOrSuffStat.suffstat(y_stat))
        return pred.ln_z() - cache.ln_z - HALF_LN_2PI

    def predictive_t_params(self, x: DataLike = None) -> Tuple[Scalar, Scalar, Scalar]:
        """
        The posterior predictive is a Student-t.
        Returns (df, loc, scale) of that distribution.
        """
        post = self.posterior(x)
        dof = 2 * post.alpha
        scale = jnp.sqrt(post.beta * (1 + 1 / post.kappa) / post.alpha)
        return dof, post.mu, scale
