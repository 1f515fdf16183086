# conjax/dist/bernoulli.py
from dataclasses import dataclass
from typing import Any, Union

import jax.numpy as jnp
from jax import Array, random

from conjax.core.base import Distribution, HasSuffStat
from conjax.core.checks import check_probability
from conjax.data.suffstat import BernoulliSuffStat


@dataclass(frozen=True, eq=False)
class Bernoulli(Distribution, HasSuffStat):
    """
    Bernoulli distribution on {False, True} (or {0, 1})
    p: probability of a success
    """
    p: Union[float, Array]

    def __post_init__(self):
        check_probability("p", self.p)

    @classmethod
    def uniform(cls) -> "Bernoulli":
        return cls(0.5)

    @property
    def q(self) -> Union[float, Array]:
        return 1.0 - self.p

    def ln_f(self, x: Any) -> Array:
        return jnp.log(self.p) if bool(x) else jnp.log(self.q)

    def draw(self, rng_key: Array) -> bool:
        return bool(random.bernoulli(rng_key, self.p))

    def empty_suffstat(self) -> BernoulliSuffStat:
        return BernoulliSuffStat()
