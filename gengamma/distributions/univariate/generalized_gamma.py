"""
Generalized gamma distribution.

The generalized gamma distribution has PDF (Wikipedia parametrization):

.. math::
    f(x|a, d, p) = \\frac{|p|/a^d}{\\Gamma(d/p)} x^{d-1} e^{-(x/a)^p}

for :math:`x > 0`, with scale :math:`a > 0` and shapes :math:`d, p` that are
nonzero and of the same sign.

Special cases:

- :math:`p = 1`: Gamma with shape :math:`d` and rate :math:`1/a`
- :math:`d = p`: Weibull with shape :math:`p` and scale :math:`a`
- :math:`d = p = 1`: Exponential with rate :math:`1/a`
- :math:`p = -1`: Inverse Gamma with shape :math:`-d` and scale :math:`a`

Parametrizations (see :mod:`gengamma.conversions`):

- Canonical :math:`(\\mu, \\sigma, Q)`, as in the R package ``flexsurv``
  (Prentice 1974). This is the stored form.
- Wikipedia :math:`(a, d, p)`
- Stacy :math:`(b, d, p)` with :math:`b = a^{-p}` (Stacy 1962), as in
  ``flexsurv::dgengamma.orig``

Raw moments are

.. math::
    E[X^n] = a^n \\frac{\\Gamma((d + n)/p)}{\\Gamma(d/p)}

and exist only when :math:`(d + n)/p > 0`. With negative ``p`` this bounds
the order of the moments, as for the inverse gamma.
"""

import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import gammaln

from gengamma.base import Distribution
from gengamma.base.distribution import _as_output
from gengamma.conversions import (
    convert_from_canonical,
    convert_to_canonical,
    from_canonical,
    from_stacy,
    from_wikipedia,
    log_scale,
    to_stacy,
    to_wikipedia,
)
from gengamma.distributions.univariate.gamma import Gamma
from gengamma.errors import UndefinedMomentWarning
from gengamma.params import (
    CanonicalParams,
    Parametrization,
    StacyParams,
    WikipediaParams,
)


def _undefined_moment(name: str, arg: float) -> float:
    warnings.warn(
        f"{name} is undefined for these parameters "
        f"(gamma function argument {arg:.6g} is not positive)",
        UndefinedMomentWarning,
        stacklevel=3,
    )
    return np.inf


class GeneralizedGamma(Distribution):
    """
    Generalized gamma distribution in the canonical (flexsurv) parametrization.

    Instances are immutable. The Wikipedia and Stacy views are recomputed
    from :math:`(\\mu, \\sigma, Q)` whenever they are requested.

    Parameters
    ----------
    mu : float, optional
        Location of :math:`\\log X`. Default is 1.
    sigma : float, optional
        Spread of :math:`\\log X`, :math:`\\sigma > 0`. Default is 1.
    Q : float, optional
        Shape, :math:`Q \\neq 0`. Default is 1.

    Raises
    ------
    InvalidParameterError
        If ``sigma <= 0``, ``Q == 0`` or any parameter is not finite.

    Examples
    --------
    >>> dist = GeneralizedGamma(mu=0.0, sigma=1.0, Q=1.0)
    >>> dist.mean()
    1.0

    >>> # Inverse gamma with shape 3 and scale 1
    >>> dist = GeneralizedGamma.from_wikipedia_params(a=1.0, d=-3.0, p=-1.0)
    >>> a, d, p = dist.params(Parametrization.WIKIPEDIA)
    >>> dist.mean()  # scale / (shape - 1)
    0.5

    >>> dist.rvs(size=5, random_state=42)  # doctest: +SKIP

    See Also
    --------
    Gamma : The special case ``p = 1``, and the sampling primitive.

    Notes
    -----
    Sampling follows the algorithm documented for ``flexsurv::rgengamma``:
    draw :math:`g \\sim \\text{Gamma}(1/Q^2, 1)`, set
    :math:`w = \\log(Q^2 g)/Q` and return :math:`\\exp(\\mu + \\sigma w)`.
    The auxiliary gamma distribution is built once, at construction.

    The cumulative distribution and quantile functions need the lower
    incomplete gamma function and raise ``NotImplementedError``.

    References
    ----------
    Prentice, R. L. (1974). A log gamma model and its maximum likelihood
    estimation. Biometrika 61(3):539-544.

    Stacy, E. W. (1962). A generalization of the gamma distribution.
    Annals of Mathematical Statistics 33:1187-92.
    """

    def __init__(self, mu: float = 1.0, sigma: float = 1.0, Q: float = 1.0):
        params = from_canonical(mu, sigma, Q)
        object.__setattr__(self, '_mu', params.mu)
        object.__setattr__(self, '_sigma', params.sigma)
        object.__setattr__(self, '_Q', params.Q)
        object.__setattr__(self, '_gamma_dist', Gamma(shape=1.0 / params.Q ** 2, rate=1.0))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ============================================================
    # Factory methods
    # ============================================================

    @classmethod
    def from_params(cls, parametrization=Parametrization.CANONICAL,
                    p1: float = 1.0, p2: float = 1.0, p3: float = 1.0) -> 'GeneralizedGamma':
        """
        Create distribution from a triple in any parametrization.

        Parameters
        ----------
        parametrization : Parametrization or str, optional
            Convention of ``(p1, p2, p3)``. Default is canonical.
        p1, p2, p3 : float, optional
            ``(mu, sigma, Q)``, ``(a, d, p)`` or ``(b, d, p)``.
            Default is ``(1, 1, 1)``.

        Returns
        -------
        dist : GeneralizedGamma
        """
        mu, sigma, Q = convert_to_canonical(parametrization, p1, p2, p3)
        return cls(mu, sigma, Q)

    @classmethod
    def from_canonical_params(cls, mu: float = 1.0, sigma: float = 1.0,
                              Q: float = 1.0) -> 'GeneralizedGamma':
        """Create distribution from flexsurv parameters ``(mu, sigma, Q)``."""
        return cls(mu, sigma, Q)

    @classmethod
    def from_wikipedia_params(cls, a: float = 1.0, d: float = 1.0,
                              p: float = 1.0) -> 'GeneralizedGamma':
        """
        Create distribution from Wikipedia parameters ``(a, d, p)``.

        Requires ``a > 0`` and either ``d > 0, p > 0`` or ``d < 0, p < 0``.
        """
        return cls(*from_wikipedia(a, d, p))

    @classmethod
    def from_stacy_params(cls, b: float = 1.0, d: float = 1.0,
                          p: float = 1.0) -> 'GeneralizedGamma':
        """
        Create distribution from Stacy parameters ``(b, d, p)``.

        Requires ``b > 0`` and either ``d > 0, p > 0`` or ``d < 0, p < 0``.
        """
        return cls(*from_stacy(b, d, p))

    @classmethod
    def from_scipy_params(cls, a: float, c: float, scale: float = 1.0) -> 'GeneralizedGamma':
        """
        Create from ``scipy.stats.gengamma`` parameters ``(a, c, scale)``.

        scipy's density is
        :math:`|c| x^{ca-1} e^{-x^c}/\\Gamma(a)` on ``x/scale``, so
        ``(a, c, scale)`` is the Wikipedia triple ``(scale, a*c, c)``.
        """
        return cls.from_wikipedia_params(a=scale, d=a * c, p=c)

    # ============================================================
    # Parameters
    # ============================================================

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    @property
    def Q(self) -> float:
        return self._Q

    @property
    def gamma_dist(self) -> Gamma:
        """Auxiliary ``Gamma(1/Q^2, 1)`` used for sampling."""
        return self._gamma_dist

    @property
    def canonical_params(self) -> CanonicalParams:
        """Parameters ``(mu, sigma, Q)``."""
        return CanonicalParams(mu=self._mu, sigma=self._sigma, Q=self._Q)

    @property
    def wikipedia_params(self) -> WikipediaParams:
        """Parameters ``(a, d, p)``, recomputed on each access."""
        return to_wikipedia(self._mu, self._sigma, self._Q)

    @property
    def stacy_params(self) -> StacyParams:
        """Parameters ``(b, d, p)``, recomputed on each access."""
        return to_stacy(self._mu, self._sigma, self._Q)

    def params(self, parametrization=Parametrization.CANONICAL):
        """
        Parameters in the requested parametrization.

        Parameters
        ----------
        parametrization : Parametrization or str, optional
            Default is canonical.

        Returns
        -------
        params : CanonicalParams, WikipediaParams or StacyParams
            Frozen dataclass; unpacks as a 3-tuple.
        """
        return convert_from_canonical(parametrization, self._mu, self._sigma, self._Q)

    def to_scipy_params(self) -> dict:
        """
        Convert to ``scipy.stats.gengamma`` parameters ``(a, c, scale)``.

        Returns
        -------
        params : dict
            Dictionary with keys 'a', 'c', 'scale'.
        """
        a, d, p = self.wikipedia_params
        return {'a': d / p, 'c': p, 'scale': a}

    def to_gamma(self, atol: float = 1e-12) -> Gamma:
        """
        Return the equivalent :class:`Gamma` when ``p == 1``.

        Raises
        ------
        ValueError
            If ``p`` differs from 1 by more than ``atol``.
        """
        a, d, p = self.wikipedia_params
        if abs(p - 1.0) > atol:
            raise ValueError(f"Not a gamma distribution: p={p}")
        return Gamma(shape=d, rate=1.0 / a)

    def _log_scale(self):
        """``(log a, d, p)``; ``a`` itself leaves the float range for small ``|Q|``."""
        d = 1.0 / (self._sigma * self._Q)
        p = self._Q / self._sigma
        return log_scale(self._mu, self._sigma, self._Q), d, p

    # ============================================================
    # Density
    # ============================================================

    def logpdf(self, x: ArrayLike) -> NDArray:
        """
        Log of the probability density function.

        .. math::
            \\log f(x) = \\log|p| - d\\log a - \\log\\Gamma(d/p)
            + (d - 1)\\log x - (x/a)^p

        Returns ``-inf`` for ``x <= 0``, where the formula is not evaluated.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the log PDF.

        Returns
        -------
        logpdf : float or ndarray
        """
        log_a, d, p = self._log_scale()
        x = np.asarray(x, dtype=float)
        inside = (x > 0) & np.isfinite(x)
        log_x = np.log(np.where(inside, x, 1.0))

        log_norm = np.log(abs(p)) - d * log_a - gammaln(d / p)
        with np.errstate(over='ignore'):
            result = log_norm + (d - 1) * log_x - np.exp(p * (log_x - log_a))

        result = np.where(inside, result, -np.inf)
        result = np.where(np.isnan(x), np.nan, result)
        return _as_output(result, x)

    def pdf(self, x: ArrayLike) -> NDArray:
        """
        Probability density function, zero for ``x <= 0``.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the PDF.

        Returns
        -------
        pdf : float or ndarray
        """
        x = np.asarray(x, dtype=float)
        return _as_output(np.exp(self.logpdf(x)), x)

    def cdf(self, x: ArrayLike) -> NDArray:
        raise NotImplementedError(
            "CDF of the generalized gamma distribution requires the lower "
            "incomplete gamma function and is not implemented"
        )

    def ppf(self, q: ArrayLike) -> NDArray:
        raise NotImplementedError(
            "Quantile function of the generalized gamma distribution requires "
            "the lower incomplete gamma function and is not implemented"
        )

    def support(self):
        """Support ``(0, inf)``, for every sign of ``d`` and ``p``."""
        return (0.0, np.inf)

    # ============================================================
    # Moments
    # ============================================================

    def moment(self, n: float) -> float:
        """
        Raw moment :math:`E[X^n] = a^n \\Gamma((d+n)/p)/\\Gamma(d/p)`.

        Returns ``np.inf`` with an :class:`UndefinedMomentWarning` when
        :math:`(d + n)/p \\le 0`.
        """
        log_a, d, p = self._log_scale()
        arg = (d + n) / p
        if arg <= 0:
            return _undefined_moment(f"Moment of order {n}", arg)
        return float(np.exp(n * log_a + gammaln(arg) - gammaln(d / p)))

    def mean(self) -> float:
        """
        Mean of the generalized gamma distribution.

        .. math::
            E[X] = Q^{2\\sigma/Q} e^{\\mu}
            \\frac{\\Gamma(1/Q^2 + \\sigma/Q)}{\\Gamma(1/Q^2)}

        Returns ``np.inf`` with an :class:`UndefinedMomentWarning` when
        :math:`1/Q^2 + \\sigma/Q \\le 0`.

        Returns
        -------
        mean : float
        """
        Qs = self._Q ** 2
        iQs = 1.0 / Qs
        arg = iQs + self._sigma / self._Q
        if arg <= 0:
            return _undefined_moment("Mean", arg)
        log_a = self._log_scale()[0]
        return float(np.exp(log_a + gammaln(arg) - gammaln(iQs)))

    def var(self) -> float:
        """
        Variance of the generalized gamma distribution.

        .. math::
            \\text{Var}[X] = a^2 \\left(
            \\frac{\\Gamma((d+2)/p)}{\\Gamma(d/p)}
            - \\left(\\frac{\\Gamma((d+1)/p)}{\\Gamma(d/p)}\\right)^2 \\right)

        Returns ``np.inf`` with an :class:`UndefinedMomentWarning` when
        :math:`(d + 2)/p \\le 0`.

        Returns
        -------
        var : float
        """
        log_a, d, p = self._log_scale()
        arg2 = (d + 2) / p
        if arg2 <= 0:
            return _undefined_moment("Variance", arg2)
        log_g0 = gammaln(d / p)
        second = np.exp(2 * log_a + gammaln(arg2) - log_g0)
        first = np.exp(log_a + gammaln((d + 1) / p) - log_g0)
        return float(second - first ** 2)

    def mode(self) -> float:
        """
        Mode: 0 if :math:`0 < d \\le 1`, else :math:`a((d-1)/p)^{1/p}`.

        With negative ``d`` and ``p`` the density vanishes at 0 and the
        mode is always interior; for the inverse gamma it is
        :math:`a/(\\alpha + 1)`.
        """
        log_a, d, p = self._log_scale()
        if 0 < d <= 1:
            return 0.0
        return float(np.exp(log_a + np.log((d - 1) / p) / p))

    # ============================================================
    # Random variate generation
    # ============================================================

    def rvs(self, size=None, random_state=None):
        """
        Generate random samples from the generalized gamma distribution.

        Each sample transforms one deviate of the cached auxiliary
        ``Gamma(1/Q^2, 1)``.

        Parameters
        ----------
        size : int or tuple of ints, optional
            Shape of samples to generate. If None, returns a float.
        random_state : int or Generator, optional
            Random number generator seed or instance.

        Returns
        -------
        samples : float or ndarray
            Random samples from the distribution.
        """
        gamma_deviate = self._gamma_dist.rvs(size=size, random_state=random_state)
        Qs = self._Q ** 2
        with np.errstate(divide='ignore'):
            w = np.log(Qs * np.asarray(gamma_deviate)) / self._Q
        x = np.exp(self._mu + self._sigma * w)
        if size is None:
            return float(x)
        return x

    def rand(self, random_state=None) -> float:
        """Draw a single sample."""
        return self.rvs(size=None, random_state=random_state)

    # ============================================================
    # Value semantics
    # ============================================================

    def __eq__(self, other):
        if not isinstance(other, GeneralizedGamma):
            return NotImplemented
        return (self._mu, self._sigma, self._Q) == (other._mu, other._sigma, other._Q)

    def __hash__(self):
        return hash((type(self).__name__, self._mu, self._sigma, self._Q))

    def __repr__(self) -> str:
        return f"GeneralizedGamma(mu={self._mu}, sigma={self._sigma}, Q={self._Q})"
