# conjax/conjugate/base.py
from abc import abstractmethod
from typing import Any, Callable, Set, Tuple, Type

import jax.numpy as jnp
from jax import Array

from conjax.core.base import Distribution
from conjax.data.view import DataLike

# (prior type, likelihood family type) pairs with a closed form update
_CONJUGATE_PAIRS: Set[Tuple[Type, Type]] = set()


def conjugate_to(family: Type[Distribution]) -> Callable[[Type], Type]:
    """class decorator registering a prior as conjugate to a likelihood family"""
    def register(cls: Type) -> Type:
        cls.family = family
        _CONJUGATE_PAIRS.add((cls, family))
        return cls
    return register


def conjugate_prior_types(family: Type[Distribution]) -> Tuple[Type, ...]:
    return tuple(sorted(
        (prior for prior, fx in _CONJUGATE_PAIRS if issubclass(family, fx)),
        key=lambda cls: cls.__name__,
    ))


def is_conjugate(prior: Any, fx: Any) -> bool:
    return any(
        isinstance(prior, prior_cls) and isinstance(fx, fx_cls)
        for prior_cls, fx_cls in _CONJUGATE_PAIRS
    )


class ConjugatePrior(Distribution):
    """
    A prior over the parameters of a likelihood family whose posterior has the
    same form as the prior.

    The prior is itself a Distribution over instances of `family`: ln_f scores
    a family instance and draw returns one.

    Every method is a pure function of the prior and its arguments, which may
    be raw data, a SuffStat, a DataOrSuffStat or None. The *_cache methods
    return plain values for the caller to hold on to; the with_cache variants
    give the same result as the uncached ones while skipping the work stored
    in the cache. A cache is tied to the prior and data it was built from.
    """
    family: Type[Distribution] = None

    @abstractmethod
    def posterior(self, x: DataLike) -> "ConjugatePrior": ...
    """
    returns a new prior of the same form with parameters updated by x.
    With no data the parameters are those of self.
    """

    @abstractmethod
    def ln_m_cache(self) -> Any: ...
    """
    data independent part of the log marginal likelihood
    """

    @abstractmethod
    def ln_m_with_cache(self, cache: Any, x: DataLike) -> Array: ...
    """
    log marginal likelihood of x given the ln_m_cache of this prior
    """

    @abstractmethod
    def ln_pp_cache(self, x: DataLike) -> Any: ...
    """
    everything the posterior predictive needs to know about x
    """

    @abstractmethod
    def ln_pp_with_cache(self, cache: Any, y: Any) -> Array: ...
    """
    log posterior predictive of y given the ln_pp_cache of x
    """

    def accepts_suffstat(self, stat: Any) -> bool:
        """whether stat has the shape this prior updates from"""
        return True

    def ln_m(self, x: DataLike) -> Array:
        """log marginal likelihood, ln p(x)"""
        return self.ln_m_with_cache(self.ln_m_cache(), x)

    def ln_pp(self, y: Any, x: DataLike = None) -> Array:
        """log posterior predictive, ln p(y | x)"""
        return self.ln_pp_with_cache(self.ln_pp_cache(x), y)

    def m(self, x: DataLike) -> Array:
        return jnp.exp(self.ln_m(x))

    def pp(self, y: Any, x: DataLike = None) -> Array:
        return jnp.exp(self.ln_pp(y, x))
