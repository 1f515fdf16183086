from conjax.dist.bernoulli import Bernoulli
from conjax.dist.categorical import Categorical
from conjax.dist.gaussian import Gaussian
from conjax.dist.mv_gaussian import MvGaussian

__all__ = ["Bernoulli", "Categorical", "Gaussian", "MvGaussian"]
