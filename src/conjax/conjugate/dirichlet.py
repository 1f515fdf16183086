# conjax/conjugate/dirichlet.py
import logging
from typing import Any, NamedTuple, Union

import jax.numpy as jnp
from jax import Array, random
from jax.typing import ArrayLike
from jax.scipy.special import gammaln
from jax.scipy.stats import dirichlet as dirichlet_dist

from conjax.conjugate.base import ConjugatePrior, conjugate_to
from conjax.core.checks import check_positive, check_vector
from conjax.data.suffstat import CategoricalSuffStat
from conjax.data.view import DataLike, as_data, extract_stat_then
from conjax.dist.categorical import Categorical
from conjax.errors import InvalidParameter

logger = logging.getLogger(__name__)


class DirichletLnMCache(NamedTuple):
    ln_gamma_sum: Array
    sum_ln_gamma: Array


@conjugate_to(Categorical)
class Dirichlet(ConjugatePrior):
    """
    Dirichlet(alphas) prior on the weights of a k category Categorical
    """
    def __init__(self, alphas: ArrayLike):
        alphas = jnp.asarray(alphas, dtype=float)
        check_vector("alphas", alphas)
        check_positive("alphas", alphas)
        self._alphas = alphas

    @classmethod
    def _unchecked(cls, alphas: Array) -> "Dirichlet":
        obj = cls.__new__(cls)
        obj._alphas = alphas
        return obj

    @property
    def alphas(self) -> Array:
        return self._alphas

    @property
    def k(self) -> int:
        return self._alphas.shape[0]

    def __repr__(self) -> str:
        return f"Dirichlet(alphas={self._alphas})"

    def ln_f(self, fx: Categorical) -> Array:
        return dirichlet_dist.logpdf(fx.weights, self.alphas)

    def draw(self, rng_key: Array) -> Categorical:
        return Categorical(random.dirichlet(rng_key, self.alphas))

    def mean_(self) -> dict:
        return {"weights": self.alphas / self.alphas.sum()}

    def variance_(self) -> dict:
        alpha_tilde = self.alphas / self.alphas.sum()
        alpha0 = self.alphas.sum()
        return {"weights": alpha_tilde * (1 - alpha_tilde) / (alpha0 + 1)}

    def accepts_suffstat(self, stat: Any) -> bool:
        return isinstance(stat, CategoricalSuffStat) and stat.k == self.k

    def posterior(self, x: DataLike) -> "Dirichlet":
        x = as_data(x)
        if x.n() == 0:
            return Dirichlet._unchecked(self.alphas)

        def update(stat: CategoricalSuffStat) -> "Dirichlet":
            logger.debug("Dirichlet posterior from n=%d observations", stat.n())
            return Dirichlet._unchecked(self.alphas + stat.counts)

        return extract_stat_then(x, lambda: CategoricalSuffStat(self.k), update)

    def ln_m_cache(self) -> DirichletLnMCache:
        alphas = self.alphas
        return DirichletLnMCache(gammaln(alphas.sum()), gammaln(alphas).sum())

    def ln_m_with_cache(self, cache: DirichletLnMCache, x: DataLike) -> Array:
        x = as_data(x)
        alphas_n = self.posterior(x).alphas
        return (
                cache.ln_gamma_sum
                - gammaln(alphas_n.sum())
                + gammaln(alphas_n).sum()
                - cache.sum_ln_gamma
        )

    def ln_pp_cache(self, x: DataLike) -> Array:
        """normalized log weights of the posterior"""
        alphas_n = self.posterior(x).alphas
        return jnp.log(alphas_n) - jnp.log(alphas_n.sum())

    def ln_pp_with_cache(self, cache: Array, y: Any) -> Array:
        # y is not range checked, an index past k - 1 reads the last weight
        return cache[int(y)]


@conjugate_to(Categorical)
class SymmetricDirichlet(Dirichlet):
    """
    Dirichlet with all k concentration parameters equal to alpha.
    The posterior is a general Dirichlet.
    """
    def __init__(self, alpha: Union[float, Array], k: int):
        check_positive("alpha", alpha)
        if int(k) < 1:
            raise InvalidParameter("k", f"must be at least 1, got {k}")
        self._alpha = alpha
        self._alphas = jnp.full(int(k), alpha, dtype=float)

    @classmethod
    def jeffreys(cls, k: int) -> "SymmetricDirichlet":
        return cls(0.5, k)

    @classmethod
    def uniform(cls, k: int) -> "SymmetricDirichlet":
        return cls(1.0, k)

    @property
    def alpha(self) -> Union[float, Array]:
        return self._alpha

    def __repr__(self) -> str:
        return f"SymmetricDirichlet(alpha={self._alpha}, k={self.k})"

    def ln_m_cache(self) -> DirichletLnMCache:
        # closed form for equal alphas
        k = self.k
        return DirichletLnMCache(gammaln(self._alpha * k), k * gammaln(self._alpha))
