from conjax.conjugate.base import ConjugatePrior, conjugate_to, conjugate_prior_types, is_conjugate
from conjax.conjugate.beta import Beta
from conjax.conjugate.dirichlet import Dirichlet, SymmetricDirichlet
from conjax.conjugate.normal_inv_gamma import NormalInvGamma
from conjax.conjugate.normal_inv_wishart import NormalInvWishart

"""
Implements the following conjugate pairs (prior / likelihood family):
1. Beta / Bernoulli
2. Dirichlet, SymmetricDirichlet / Categorical
3. Normal-Inverse Gamma / Gaussian (univariate)
4. Normal-Inverse Wishart / MvGaussian (multivariate)
"""

__all__ = [
    "ConjugatePrior",
    "conjugate_to",
    "conjugate_prior_types",
    "is_conjugate",
    "Beta",
    "Dirichlet",
    "SymmetricDirichlet",
    "NormalInvGamma",
    "NormalInvWishart",
]
