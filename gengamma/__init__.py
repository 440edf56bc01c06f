"""
gengamma: the generalized gamma distribution.

Implements the three-parameter generalized gamma distribution, which
contains the gamma, Weibull, exponential and inverse gamma distributions,
with a scipy-style API.

Key features:
- Three parametrizations: canonical (flexsurv), Wikipedia, Stacy
- Sampling by transforming a single standard gamma deviate
- Closed-form density, moments and mode
- Frozen dataclass parameter containers (gengamma.params)
"""

from gengamma.base import Distribution
from gengamma.conversions import (
    convert_from_canonical,
    convert_to_canonical,
    from_stacy,
    from_wikipedia,
    to_canonical,
    to_stacy,
    to_wikipedia,
)
from gengamma.distributions import Gamma, GeneralizedGamma
from gengamma.errors import InvalidParameterError, UndefinedMomentWarning
from gengamma.params import (
    CanonicalParams,
    GammaParams,
    Parametrization,
    StacyParams,
    WikipediaParams,
)

__version__ = "0.1.0"

__all__ = [
    # Distributions
    "Distribution",
    "Gamma",
    "GeneralizedGamma",
    # Parametrizations
    "Parametrization",
    "CanonicalParams",
    "WikipediaParams",
    "StacyParams",
    "GammaParams",
    # Conversions
    "from_wikipedia",
    "from_stacy",
    "to_canonical",
    "to_wikipedia",
    "to_stacy",
    "convert_to_canonical",
    "convert_from_canonical",
    # Errors
    "InvalidParameterError",
    "UndefinedMomentWarning",
]
