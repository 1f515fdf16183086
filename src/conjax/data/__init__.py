from conjax.data.suffstat import (
    SuffStat,
    BernoulliSuffStat,
    CategoricalSuffStat,
    GaussianSuffStat,
    MvGaussianSuffStat,
)
from conjax.data.view import DataKind, DataOrSuffStat, DataLike, as_data, extract_stat_then

__all__ = [
    "SuffStat",
    "BernoulliSuffStat",
    "CategoricalSuffStat",
    "GaussianSuffStat",
    "MvGaussianSuffStat",
    "DataKind",
    "DataOrSuffStat",
    "DataLike",
    "as_data",
    "extract_stat_then",
]
