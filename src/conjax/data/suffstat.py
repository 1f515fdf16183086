# conjax/data/suffstat.py
from abc import ABC, abstractmethod
from typing import Any, Iterable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from conjax.errors import SuffStatUnderflow


class SuffStat(ABC):
    """
    Fixed size accumulator summarizing a sequence of observations.

    observe and forget are inverses for the same value, and the state after
    observe_many does not depend on the order of the observations (up to
    floating point summation error). A statistic is single-writer: concurrent
    observe/forget calls need external locking.
    """
    @abstractmethod
    def n(self) -> int: ...
    """
    returns the number of observations
    """

    @abstractmethod
    def observe(self, x: Any) -> None: ...
    """
    assimilate the datum x into the statistic
    """

    @abstractmethod
    def forget(self, x: Any) -> None: ...
    """
    remove the datum x from the statistic. Raises SuffStatUnderflow when the
    statistic cannot hold x; a value that was never observed but fits the
    counts is not detectable and corrupts the statistic.
    """

    @abstractmethod
    def copy(self) -> "SuffStat": ...

    def observe_many(self, xs: Iterable[Any]) -> None:
        for x in xs:
            self.observe(x)

    def forget_many(self, xs: Iterable[Any]) -> None:
        for x in xs:
            self.forget(x)

    def _check_forget(self) -> None:
        if self._n == 0:
            raise SuffStatUnderflow(f"cannot forget from an empty {type(self).__name__}")


class BernoulliSuffStat(SuffStat):
    """number of trials n and number of successes k"""
    def __init__(self, n: int = 0, k: int = 0):
        self._n = n
        self._k = k

    def n(self) -> int:
        return self._n

    @property
    def k(self) -> int:
        return self._k

    def observe(self, x: Any) -> None:
        self._n += 1
        if bool(x):
            self._k += 1

    def forget(self, x: Any) -> None:
        self._check_forget()
        if bool(x):
            if self._k == 0:
                raise SuffStatUnderflow("cannot forget a success: no successes observed")
            self._k -= 1
        elif self._n == self._k:
            raise SuffStatUnderflow("cannot forget a failure: no failures observed")
        self._n -= 1

    def copy(self) -> "BernoulliSuffStat":
        return BernoulliSuffStat(self._n, self._k)

    def __repr__(self) -> str:
        return f"BernoulliSuffStat(n={self._n}, k={self._k})"


class CategoricalSuffStat(SuffStat):
    """
    counts per category for categories 0..k-1. Categories are not range
    checked: observing k or more increments n but drops the count update.
    :param k: number of categories
    """
    def __init__(self, k: int):
        self._n = 0
        self._counts = jnp.zeros(k)

    def n(self) -> int:
        return self._n

    @property
    def k(self) -> int:
        return self._counts.shape[0]

    @property
    def counts(self) -> Array:
        return self._counts

    def observe(self, x: Any) -> None:
        self._n += 1
        self._counts = self._counts.at[int(x)].add(1.0)

    def forget(self, x: Any) -> None:
        self._check_forget()
        ix = int(x)
        if self._counts[ix] < 1:
            raise SuffStatUnderflow(f"cannot forget category {ix}: count is zero")
        self._n -= 1
        self._counts = self._counts.at[ix].add(-1.0)

    def copy(self) -> "CategoricalSuffStat":
        stat = CategoricalSuffStat(self.k)
        stat._n = self._n
        stat._counts = self._counts
        return stat

    def __repr__(self) -> str:
        return f"CategoricalSuffStat(n={self._n}, counts={self._counts})"


class GaussianSuffStat(SuffStat):
    """n, sum of x and sum of x^2 for univariate real data"""
    def __init__(self):
        self._n = 0
        self._sum_x = 0.0
        self._sum_x_sq = 0.0

    def n(self) -> int:
        return self._n

    @property
    def sum_x(self) -> float:
        return self._sum_x

    @property
    def sum_x_sq(self) -> float:
        return self._sum_x_sq

    def observe(self, x: ArrayLike) -> None:
        x = float(x)
        self._n += 1
        self._sum_x += x
        self._sum_x_sq += x * x

    def forget(self, x: ArrayLike) -> None:
        self._check_forget()
        if self._n == 1:
            # back to exactly empty
            self._n = 0
            self._sum_x = 0.0
            self._sum_x_sq = 0.0
            return
        x = float(x)
        self._n -= 1
        self._sum_x -= x
        self._sum_x_sq -= x * x

    def copy(self) -> "GaussianSuffStat":
        stat = GaussianSuffStat()
        stat._n = self._n
        stat._sum_x = self._sum_x
        stat._sum_x_sq = self._sum_x_sq
        return stat

    def __repr__(self) -> str:
        return f"GaussianSuffStat(n={self._n}, sum_x={self._sum_x}, sum_x_sq={self._sum_x_sq})"


class MvGaussianSuffStat(SuffStat):
    """
    n, sum of x and sum of outer products x x^T for d-dimensional data
    :param ndims: dimension d of the observations
    """
    def __init__(self, ndims: int):
        self._n = 0
        self._sum_x = jnp.zeros(ndims)
        self._sum_x_sq = jnp.zeros((ndims, ndims))

    def n(self) -> int:
        return self._n

    @property
    def ndims(self) -> int:
        return self._sum_x.shape[0]

    @property
    def sum_x(self) -> Array:
        return self._sum_x

    @property
    def sum_x_sq(self) -> Array:
        return self._sum_x_sq

    def observe(self, x: ArrayLike) -> None:
        x = jnp.asarray(x)
        self._n += 1
        self._sum_x = self._sum_x + x
        self._sum_x_sq = self._sum_x_sq + jnp.outer(x, x)

    def forget(self, x: ArrayLike) -> None:
        self._check_forget()
        if self._n == 1:
            self._n = 0
            self._sum_x = jnp.zeros_like(self._sum_x)
            self._sum_x_sq = jnp.zeros_like(self._sum_x_sq)
            return
        x = jnp.asarray(x)
        self._n -= 1
        self._sum_x = self._sum_x - x
        self._sum_x_sq = self._sum_x_sq - jnp.outer(x, x)

    def copy(self) -> "MvGaussianSuffStat":
        stat = MvGaussianSuffStat(self.ndims)
        stat._n = self._n
        stat._sum_x = self._sum_x
        stat._sum_x_sq = self._sum_x_sq
        return stat

    def __repr__(self) -> str:
        return f"MvGaussianSuffStat(n={self._n}, ndims={self.ndims})"
