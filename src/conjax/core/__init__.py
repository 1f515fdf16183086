from conjax.core.base import Distribution, HasSuffStat
from conjax.core.math import LN_2PI, HALF_LN_2PI, lnmv_gamma, multivariate_t_logpdf

__all__ = [
    "Distribution",
    "HasSuffStat",
    "LN_2PI",
    "HALF_LN_2PI",
    "lnmv_gamma",
    "multivariate_t_logpdf",
]
