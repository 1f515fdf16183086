# conjax/core/base.py
from abc import ABC, abstractmethod
from typing import Any, List

import jax.numpy as jnp
from jax import Array, random


class Distribution(ABC):
    """
    base class for random variables: a log density/mass at a point and draws
    from a jax PRNG key
    """
    @abstractmethod
    def ln_f(self, x: Any) -> Array: ...
    """
    log of the density/mass function at x
    """

    @abstractmethod
    def draw(self, rng_key: Array) -> Any: ...
    """
    single draw from the distribution
    """

    def f(self, x: Any) -> Array:
        return jnp.exp(self.ln_f(x))

    def sample(self, rng_key: Array, num_samples: int = 1) -> List[Any]:
        keys = random.split(rng_key, num_samples)
        return [self.draw(key) for key in keys]


class HasSuffStat(ABC):
    """
    likelihood families whose data can be summarized by a fixed size statistic
    """
    @abstractmethod
    def empty_suffstat(self): ...
    """
    returns a new SuffStat with no observations
    """
