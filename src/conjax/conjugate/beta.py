# conjax/conjugate/beta.py
import logging
from typing import Any, NamedTuple, Union

import jax.numpy as jnp
from jax import Array, random
from jax.scipy.special import betaln
from jax.scipy.stats import beta as beta_dist

from conjax.conjugate.base import ConjugatePrior, conjugate_to
from conjax.core.checks import check_positive
from conjax.data.suffstat import BernoulliSuffStat
from conjax.data.view import DataLike, as_data, extract_stat_then
from conjax.dist.bernoulli import Bernoulli

logger = logging.getLogger(__name__)


class BetaLnPpCache(NamedTuple):
    ln_p_success: Array
    ln_p_failure: Array


@conjugate_to(Bernoulli)
class Beta(ConjugatePrior):
    """
    Beta(alpha, beta) prior on the success probability of a Bernoulli
    """
    def __init__(self, alpha: Union[float, Array], beta: Union[float, Array]):
        check_positive("alpha", alpha)
        check_positive("beta", beta)
        self._alpha = alpha
        self._beta = beta

    @classmethod
    def _unchecked(cls, alpha, beta) -> "Beta":
        obj = cls.__new__(cls)
        obj._alpha = alpha
        obj._beta = beta
        return obj

    @classmethod
    def jeffreys(cls) -> "Beta":
        return cls(0.5, 0.5)

    @classmethod
    def uniform(cls) -> "Beta":
        return cls(1.0, 1.0)

    @property
    def alpha(self) -> Union[float, Array]:
        return self._alpha

    @property
    def beta(self) -> Union[float, Array]:
        return self._beta

    def __repr__(self) -> str:
        return f"Beta(alpha={self._alpha}, beta={self._beta})"

    def ln_f(self, fx: Bernoulli) -> Array:
        return beta_dist.logpdf(fx.p, self._alpha, self._beta)

    def draw(self, rng_key: Array) -> Bernoulli:
        return Bernoulli(random.beta(rng_key, self._alpha, self._beta))

    def mean_(self) -> dict:
        return {"p": self._alpha / (self._alpha + self._beta)}

    def variance_(self) -> dict:
        a, b = self._alpha, self._beta
        return {"p": a * b / ((a + b + 1) * (a + b) ** 2)}

    def posterior(self, x: DataLike) -> "Beta":
        x = as_data(x)
        if x.n() == 0:
            return self._unchecked(self._alpha, self._beta)

        def update(stat: BernoulliSuffStat) -> "Beta":
            logger.debug("Beta posterior from n=%d observations", stat.n())
            return self._unchecked(self._alpha + stat.k, self._beta + stat.n() - stat.k)

        return extract_stat_then(x, BernoulliSuffStat, update)

    def ln_m_cache(self) -> Array:
        return betaln(self._alpha, self._beta)

    def ln_m_with_cache(self, cache: Array, x: DataLike) -> Array:
        post = self.posterior(x)
        return betaln(post.alpha, post.beta) - cache

    def ln_pp_cache(self, x: DataLike) -> BetaLnPpCache:
        post = self.posterior(x)
        ln_total = jnp.log(post.alpha + post.beta)
        return BetaLnPpCache(jnp.log(post.alpha) - ln_total, jnp.log(post.beta) - ln_total)

    def ln_pp_with_cache(self, cache: BetaLnPpCache, y: Any) -> Array:
        return cache.ln_p_success if bool(y) else cache.ln_p_failure
