# conjax/models/conjugate_model.py
import logging
from typing import Any, Iterable, List

from jax import Array, random

from conjax.conjugate.base import ConjugatePrior, is_conjugate
from conjax.core.base import Distribution, HasSuffStat
from conjax.data.suffstat import SuffStat
from conjax.data.view import DataOrSuffStat

logger = logging.getLogger(__name__)


class ConjugateModel:
    """
    A likelihood family with a conjugate prior and the running sufficient
    statistic of the data seen so far.

    The prior is shared, not copied, so one prior can back many models. Every
    inference method forwards to the prior with the model's statistic.

    Args:
        fx: likelihood family instance, provides the empty statistic
        prior: prior conjugate to type(fx)

    Example:
        model = ConjugateModel(Bernoulli.uniform(), Beta.jeffreys())
        model.observe_many(flips)
        ys = model.sample(key, 10)
    """
    def __init__(self, fx: HasSuffStat, prior: ConjugatePrior):
        if not is_conjugate(prior, fx):
            raise TypeError(f"{type(prior).__name__} is not conjugate to {type(fx).__name__}")
        stat = fx.empty_suffstat()
        if not prior.accepts_suffstat(stat):
            raise TypeError(f"{prior!r} does not match the dimensions of {stat!r}")
        self.fx = fx
        self.prior = prior
        self._stat = stat

    @property
    def stat(self) -> SuffStat:
        return self._stat

    def n(self) -> int:
        return self._stat.n()

    def observe(self, x: Any) -> None:
        self._stat.observe(x)

    def forget(self, x: Any) -> None:
        self._stat.forget(x)

    def observe_many(self, xs: Iterable[Any]) -> None:
        self._stat.observe_many(xs)
        logger.debug("%s observed data, n=%d", type(self.fx).__name__, self.n())

    def forget_many(self, xs: Iterable[Any]) -> None:
        self._stat.forget_many(xs)
        logger.debug("%s forgot data, n=%d", type(self.fx).__name__, self.n())

    def _data(self) -> DataOrSuffStat:
        return DataOrSuffStat.suffstat(self._stat)

    def posterior(self) -> ConjugatePrior:
        return self.prior.posterior(self._data())

    def ln_m(self) -> Array:
        return self.prior.ln_m(self._data())

    def m(self) -> Array:
        return self.prior.m(self._data())

    def ln_pp(self, y: Any) -> Array:
        return self.prior.ln_pp(y, self._data())

    def pp(self, y: Any) -> Array:
        return self.prior.pp(y, self._data())

    def draw(self, rng_key: Array) -> Any:
        """one draw from the posterior predictive"""
        key_fx, key_x = random.split(rng_key)
        fx: Distribution = self.posterior().draw(key_fx)
        return fx.draw(key_x)

    def sample(self, rng_key: Array, num_samples: int = 1) -> List[Any]:
        post = self.posterior()
        keys = random.split(rng_key, num_samples)
        draws = []
        for key in keys:
            key_fx, key_x = random.split(key)
            draws.append(post.draw(key_fx).draw(key_x))
        return draws
