# conjax/conjugate/normal_inv_wishart.py
import logging
from typing import Any, NamedTuple, Tuple, Union

import jax.numpy as jnp
from jax import Array, random
from jax.typing import ArrayLike
from jax.scipy.stats import multivariate_normal

from conjax.conjugate.base import ConjugatePrior, conjugate_to
from conjax.core.checks import check_positive, check_spd, check_vector
from conjax.core.math import LN_2, LN_2PI, lnmv_gamma
from conjax.data.suffstat import MvGaussianSuffStat
from conjax.data.view import DataLike, DataOrSuffStat, as_data, extract_stat_then
from conjax.dist.mv_gaussian import MvGaussian
from conjax.errors import InvalidParameter

logger = logging.getLogger(__name__)


def ln_z(k: Union[float, Array], df: Union[float, Array], scale: Array) -> Array:
    """
    log normalizer of the Normal-Inverse-Wishart,
        (df d / 2) ln 2 + ln Γ_d(df / 2) + (d / 2) ln(2π / k) - (df / 2) ln|scale|
    """
    d = scale.shape[0]
    v2 = df / 2.0
    logdet = jnp.linalg.slogdet(scale)[1]
    return v2 * d * LN_2 + lnmv_gamma(d, v2) + d / 2.0 * jnp.log(2.0 * jnp.pi / k) - v2 * logdet


class NiwLnPpCache(NamedTuple):
    posterior: "NormalInvWishart"
    ln_z: Array


@conjugate_to(MvGaussian)
class NormalInvWishart(ConjugatePrior):
    """
    Normal-Inverse-Wishart prior on the mean and covariance of a MvGaussian:
        Sigma ~ IW(df, scale),  mu | Sigma ~ N(mu0, Sigma / k)

    mu: prior mean (d,)
    k: precision scaling of the mean, > 0
    df: degrees of freedom, >= d
    scale: scale matrix (d, d), symmetric positive definite
    """
    def __init__(self, mu: ArrayLike, k: Union[float, Array], df: Union[float, Array], scale: ArrayLike):
        mu = jnp.asarray(mu, dtype=float)
        scale = jnp.asarray(scale, dtype=float)
        check_vector("mu", mu)
        d = mu.shape[0]
        check_positive("k", k)
        check_positive("df", df)
        if df < d:
            raise InvalidParameter("df", f"must be at least the number of dimensions ({d}), got {df}")
        check_spd("scale", scale, size=d)
        self._mu = mu
        self._k = k
        self._df = df
        self._scale = scale

    @classmethod
    def _unchecked(cls, mu: Array, k, df, scale: Array) -> "NormalInvWishart":
        # posteriors of a valid prior are valid, skip validation
        niw = cls.__new__(cls)
        niw._mu = mu
        niw._k = k
        niw._df = df
        niw._scale = scale
        return niw

    @property
    def mu(self) -> Array:
        return self._mu

    @property
    def k(self) -> Union[float, Array]:
        return self._k

    @property
    def df(self) -> Union[float, Array]:
        return self._df

    @property
    def scale(self) -> Array:
        return self._scale

    @property
    def ndims(self) -> int:
        return self._mu.shape[0]

    def __repr__(self) -> str:
        return f"NormalInvWishart(mu={self._mu}, k={self._k}, df={self._df}, scale={self._scale})"

    def ln_z(self) -> Array:
        return ln_z(self._k, self._df, self._scale)

    # Distribution over MvGaussian
    def ln_f(self, fx: MvGaussian) -> Array:
        d = self.ndims
        sigma = fx.cov
        ln_mu = multivariate_normal.logpdf(fx.mu, self._mu, sigma / self._k)
        v2 = self._df / 2.0
        ln_iw = (
                v2 * jnp.linalg.slogdet(self._scale)[1]
                - v2 * d * LN_2
                - lnmv_gamma(d, v2)
                - 0.5 * (self._df + d + 1) * jnp.linalg.slogdet(sigma)[1]
                - 0.5 * jnp.trace(jnp.linalg.solve(sigma, self._scale))
        )
        return ln_mu + ln_iw

    def draw(self, rng_key: Array) -> MvGaussian:
        """
        Sample (mu, Sigma) using the Bartlett decomposition of the Wishart
        precision Sigma^-1 ~ W(df, scale^-1).
        """
        d = self.ndims
        key_chi, key_normal, key_mu = random.split(rng_key, 3)
        chol = jnp.linalg.cholesky(jnp.linalg.inv(self._scale))

        dfs = self._df - jnp.arange(d)
        diag = jnp.sqrt(2.0 * random.gamma(key_chi, dfs / 2.0))
        a = jnp.tril(random.normal(key_normal, (d, d)), k=-1) + jnp.diag(diag)

        la = chol @ a
        sigma = jnp.linalg.inv(la @ la.T)
        sigma = 0.5 * (sigma + sigma.T)
        mu = random.multivariate_normal(key_mu, self._mu, sigma / self._k)
        return MvGaussian(mu, sigma)

    def mean_(self) -> dict:
        d = self.ndims
        if self._df > d + 1:
            sigma = self._scale / (self._df - d - 1)
        else:
            sigma = jnp.full_like(self._scale, jnp.nan)
        return {"mu": self._mu, "sigma": sigma}

    def variance_(self) -> dict:
        # only marginal variances of mu
        d = self.ndims
        if self._df > d + 1:
            var_mu = jnp.diag(self._scale) / (self._k * (self._df - d - 1))
        else:
            var_mu = jnp.full_like(self._mu, jnp.nan)
        return {"mu": var_mu}

    # ConjugatePrior
    def accepts_suffstat(self, stat: Any) -> bool:
        return isinstance(stat, MvGaussianSuffStat) and stat.ndims == self.ndims

    def posterior(self, x: DataLike) -> "NormalInvWishart":
        x = as_data(x)
        if x.n() == 0:
            return self._unchecked(self._mu, self._k, self._df, self._scale)
        return extract_stat_then(x, lambda: MvGaussianSuffStat(self.ndims), self._posterior_from_stat)

    def _posterior_from_stat(self, stat: MvGaussianSuffStat) -> "NormalInvWishart":
        n = stat.n()
        x_bar = stat.sum_x / n
        diff = x_bar - self._mu
        scatter = stat.sum_x_sq - n * jnp.outer(x_bar, x_bar)

        k_n = self._k + n
        df_n = self._df + n
        mu_n = (self._k * self._mu + stat.sum_x) / k_n
        scale_n = self._scale + scatter + (self._k * n / k_n) * jnp.outer(diff, diff)

        logger.debug("NormalInvWishart posterior from n=%d observations", n)
        return self._unchecked(mu_n, k_n, df_n, scale_n)

    def ln_m_cache(self) -> Array:
        return self.ln_z()

    def ln_m_with_cache(self, cache: Array, x: DataLike) -> Array:
        x = as_data(x)
        zn = self.posterior(x).ln_z()
        nd = self.ndims * x.n()
        return zn - cache - nd / 2.0 * LN_2PI

    def ln_pp_cache(self, x: DataLike) -> NiwLnPpCache:
        post = self.posterior(x)
        return NiwLnPpCache(post, post.ln_z())

    def ln_pp_with_cache(self, cache: NiwLnPpCache, y: ArrayLike) -> Array:
        y_stat = MvGaussianSuffStat(self.ndims)
        y_stat.observe(y)
        pred = cache.posterior.posterior(DataOrSuffStat.suffstat(y_stat))
        return pred.ln_z() - cache.ln_z - self.ndims / 2.0 * LN_2PI

    def predictive_t_params(self, x: DataLike = None) -> Tuple[Union[float, Array], Array, Array]:
        """
        The posterior predictive is a multivariate Student-t.
        Returns (df, loc, scale) of that distribution.
        """
        post = self.posterior(x)
        d = self.ndims
        dof = post.df - d + 1
        scale = post.scale * (post.k + 1) / (post.k * dof)
        return dof, post.mu, scale
