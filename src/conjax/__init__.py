import logging

from conjax.config import Config, apply_config, load_config
from conjax.errors import ConjaxError, ConstructionError, InvalidParameter, SuffStatUnderflow
from conjax.data import (
    SuffStat,
    BernoulliSuffStat,
    CategoricalSuffStat,
    GaussianSuffStat,
    MvGaussianSuffStat,
    DataOrSuffStat,
    as_data,
    extract_stat_then,
)
from conjax.dist import Bernoulli, Categorical, Gaussian, MvGaussian
from conjax.conjugate import (
    ConjugatePrior,
    conjugate_prior_types,
    is_conjugate,
    Beta,
    Dirichlet,
    SymmetricDirichlet,
    NormalInvGamma,
    NormalInvWishart,
)
from conjax.models import ConjugateModel

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "apply_config",
    "load_config",
    "ConjaxError",
    "ConstructionError",
    "InvalidParameter",
    "SuffStatUnderflow",
    "SuffStat",
    "BernoulliSuffStat",
    "CategoricalSuffStat",
    "GaussianSuffStat",
    "MvGaussianSuffStat",
    "DataOrSuffStat",
    "as_data",
    "extract_stat_then",
    "Bernoulli",
    "Categorical",
    "Gaussian",
    "MvGaussian",
    "ConjugatePrior",
    "conjugate_prior_types",
    "is_conjugate",
    "Beta",
    "Dirichlet",
    "SymmetricDirichlet",
    "NormalInvGamma",
    "NormalInvWishart",
    "ConjugateModel",
]
