# conjax/data/view.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence, TypeVar, Union

from conjax.data.suffstat import SuffStat

T = TypeVar("T")


class DataKind(Enum):
    DATA = "data"
    SUFFSTAT = "suffstat"
    NONE = "none"


@dataclass(frozen=True, eq=False)
class DataOrSuffStat:
    """
    Either a sequence of raw observations, a sufficient statistic, or nothing.

    The view holds a reference to the caller's sequence or statistic; it never
    copies or mutates it. Build one with DataOrSuffStat.data(xs),
    DataOrSuffStat.suffstat(stat) or DataOrSuffStat.none(), or let as_data
    pick the variant.
    """
    kind: DataKind
    value: Any = None

    @classmethod
    def data(cls, xs: Sequence[Any]) -> "DataOrSuffStat":
        return cls(DataKind.DATA, xs)

    @classmethod
    def suffstat(cls, stat: SuffStat) -> "DataOrSuffStat":
        return cls(DataKind.SUFFSTAT, stat)

    @classmethod
    def none(cls) -> "DataOrSuffStat":
        return cls(DataKind.NONE)

    def n(self) -> int:
        """number of observations"""
        if self.kind is DataKind.DATA:
            return len(self.value)
        if self.kind is DataKind.SUFFSTAT:
            return self.value.n()
        return 0

    def is_data(self) -> bool:
        return self.kind is DataKind.DATA

    def is_suffstat(self) -> bool:
        return self.kind is DataKind.SUFFSTAT

    def is_none(self) -> bool:
        return self.kind is DataKind.NONE


DataLike = Union[DataOrSuffStat, SuffStat, Sequence[Any], None]


def as_data(x: DataLike) -> DataOrSuffStat:
    """wraps raw data, a statistic or None into a DataOrSuffStat"""
    if isinstance(x, DataOrSuffStat):
        return x
    if x is None:
        return DataOrSuffStat.none()
    if isinstance(x, SuffStat):
        return DataOrSuffStat.suffstat(x)
    return DataOrSuffStat.data(x)


def extract_stat_then(
    x: DataLike,
    empty: Callable[[], SuffStat],
    f: Callable[[SuffStat], T],
) -> T:
    """
    Calls f with a populated sufficient statistic for x.

    An existing statistic is passed through as is. Raw data is folded, in
    sequence order, into a fresh statistic from empty(). No data gives f a
    fresh empty statistic.
    """
    x = as_data(x)
    if x.is_suffstat():
        return f(x.value)

    stat = empty()
    if x.is_data():
        stat.observe_many(x.value)
    return f(stat)
