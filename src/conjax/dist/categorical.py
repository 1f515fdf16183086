# conjax/dist/categorical.py
from typing import Any

import jax.numpy as jnp
from jax import Array, random
from jax.typing import ArrayLike

from conjax.core.base import Distribution, HasSuffStat
from conjax.core.checks import check_vector
from conjax.data.suffstat import CategoricalSuffStat
from conjax.errors import InvalidParameter


class Categorical(Distribution, HasSuffStat):
    """
    Categorical distribution over 0..k-1
    weights: non-negative, not necessarily normalized weights of the k categories
    """
    def __init__(self, weights: ArrayLike):
        weights = jnp.asarray(weights, dtype=float)
        check_vector("weights", weights)
        if bool(jnp.any(weights < 0)) or not bool(jnp.sum(weights) > 0):
            raise InvalidParameter("weights", "must be non-negative with a positive sum")
        self._ln_weights = jnp.log(weights) - jnp.log(jnp.sum(weights))

    @classmethod
    def uniform(cls, k: int) -> "Categorical":
        return cls(jnp.ones(k))

    @property
    def k(self) -> int:
        return self._ln_weights.shape[0]

    @property
    def ln_weights(self) -> Array:
        return self._ln_weights

    @property
    def weights(self) -> Array:
        return jnp.exp(self._ln_weights)

    def ln_f(self, x: Any) -> Array:
        return self._ln_weights[int(x)]

    def draw(self, rng_key: Array) -> int:
        return int(random.categorical(rng_key, self._ln_weights))

    def empty_suffstat(self) -> CategoricalSuffStat:
        return CategoricalSuffStat(self.k)

    def __repr__(self) -> str:
        return f"Categorical(weights={self.weights})"
