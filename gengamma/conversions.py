"""
Conversions between the parametrizations of the generalized gamma distribution.

With :math:`(\\mu, \\sigma, Q)` the canonical (flexsurv) parameters and
:math:`(a, d, p)` the Wikipedia parameters:

.. math::
    \\mu = \\log a + \\frac{\\log|d| - \\log|p|}{p}, \\quad
    \\sigma = \\frac{1}{\\sqrt{pd}}, \\quad
    Q = \\sqrt{p/d}\\,\\mathrm{sign}(p)

and conversely

.. math::
    d = \\frac{1}{\\sigma Q}, \\quad p = \\frac{Q}{\\sigma}, \\quad
    a = |Q|^{2/p} e^{\\mu}.

The Stacy parameters :math:`(b, d, p)` share ``d`` and ``p`` with the
Wikipedia form and use :math:`b = a^{-p}`.

``d`` and ``p`` may both be negative; this is what makes the inverse gamma a
member of the family. Since :math:`\\sigma > 0`, ``d`` and ``p`` always take
the sign of ``Q``.

Every function validates its inputs and raises
:class:`~gengamma.errors.InvalidParameterError` outside the domain.
"""

import numpy as np

from gengamma.errors import InvalidParameterError
from gengamma.params import (
    CanonicalParams,
    Parametrization,
    StacyParams,
    WikipediaParams,
)


def _check_finite(**kwargs) -> None:
    for name, value in kwargs.items():
        if not np.isfinite(value):
            raise InvalidParameterError(f"{name} must be finite, got {value}")


def _check_shapes(d, p) -> None:
    if d == 0:
        raise InvalidParameterError(f"d must be nonzero, got {d}")
    if p == 0:
        raise InvalidParameterError(f"p must be nonzero, got {p}")
    if np.sign(d) != np.sign(p):
        raise InvalidParameterError(
            f"d and p must have the same sign, got d={d}, p={p}"
        )


# ============================================================================
# Validation
# ============================================================================

def validate_canonical(mu, sigma, Q) -> None:
    """Raise if ``(mu, sigma, Q)`` is not a valid canonical triple."""
    _check_finite(mu=mu, sigma=sigma, Q=Q)
    if sigma <= 0:
        raise InvalidParameterError(f"sigma must be positive, got {sigma}")
    if Q == 0:
        raise InvalidParameterError(f"Q must be nonzero, got {Q}")


def validate_wikipedia(a, d, p) -> None:
    """Raise if ``(a, d, p)`` is not a valid Wikipedia triple."""
    _check_finite(a=a, d=d, p=p)
    if a <= 0:
        raise InvalidParameterError(f"a must be positive, got {a}")
    _check_shapes(d, p)


def validate_stacy(b, d, p) -> None:
    """Raise if ``(b, d, p)`` is not a valid Stacy triple."""
    _check_finite(b=b, d=d, p=p)
    if b <= 0:
        raise InvalidParameterError(f"b must be positive, got {b}")
    _check_shapes(d, p)


def log_scale(mu, sigma, Q) -> float:
    """
    Logarithm of the Wikipedia scale, :math:`\\log a = (2/p)\\log|Q| + \\mu`.

    Finite for every valid canonical triple, also where ``a`` itself
    underflows to zero or overflows (small ``|Q|``, large ``sigma``).
    """
    validate_canonical(mu, sigma, Q)
    return float(2.0 * sigma / Q * np.log(abs(Q)) + mu)


def _exp(x) -> float:
    with np.errstate(over='ignore', under='ignore'):
        return float(np.exp(x))


# ============================================================================
# Into the canonical form
# ============================================================================

def from_canonical(mu, sigma, Q) -> CanonicalParams:
    """Validate a canonical triple and wrap it."""
    validate_canonical(mu, sigma, Q)
    return CanonicalParams(mu=float(mu), sigma=float(sigma), Q=float(Q))


def from_wikipedia(a, d, p) -> CanonicalParams:
    """
    Convert Wikipedia parameters :math:`(a, d, p)` to :math:`(\\mu, \\sigma, Q)`.

    Parameters
    ----------
    a : float
        Scale, ``a > 0``.
    d, p : float
        Shapes, nonzero and of the same sign.

    Returns
    -------
    params : CanonicalParams
    """
    validate_wikipedia(a, d, p)
    mu = np.log(a) + (np.log(abs(d)) - np.log(abs(p))) / p
    sigma = 1.0 / np.sqrt(p * d)
    Q = np.sqrt(p / d) * np.sign(p)
    return CanonicalParams(mu=float(mu), sigma=float(sigma), Q=float(Q))


def from_stacy(b, d, p) -> CanonicalParams:
    """
    Convert Stacy parameters :math:`(b, d, p)` to :math:`(\\mu, \\sigma, Q)`.

    Uses :math:`a = b^{-1/p}` and :func:`from_wikipedia`. Raises
    :class:`~gengamma.errors.InvalidParameterError` when that scale is not
    representable as a positive finite float.
    """
    validate_stacy(b, d, p)
    a = _exp(-np.log(b) / p)
    if a == 0 or not np.isfinite(a):
        raise InvalidParameterError(
            f"Scale a = b**(-1/p) is not representable for b={b}, p={p}"
        )
    return from_wikipedia(a, d, p)


# ============================================================================
# Out of the canonical form
# ============================================================================

def to_canonical(mu, sigma, Q) -> CanonicalParams:
    """Identity view of the canonical parameters."""
    return from_canonical(mu, sigma, Q)


def to_wikipedia(mu, sigma, Q) -> WikipediaParams:
    """
    Convert :math:`(\\mu, \\sigma, Q)` to Wikipedia parameters :math:`(a, d, p)`.

    .. math::
        d = \\frac{1}{\\sigma Q}, \\quad p = \\frac{Q}{\\sigma}, \\quad
        a = |Q|^{2/p} e^{\\mu}

    ``a`` is ``inf`` or ``0.0`` when it is outside the float range; use
    :func:`log_scale` for its logarithm.
    """
    log_a = log_scale(mu, sigma, Q)
    d = 1.0 / (sigma * Q)
    p = Q / sigma
    return WikipediaParams(a=_exp(log_a), d=float(d), p=float(p))


def to_stacy(mu, sigma, Q) -> StacyParams:
    """
    Convert :math:`(\\mu, \\sigma, Q)` to Stacy parameters :math:`(b, d, p)`.

    ``b`` is ``inf`` or ``0.0`` when it is outside the float range.
    """
    log_a = log_scale(mu, sigma, Q)
    d = 1.0 / (sigma * Q)
    p = Q / sigma
    return StacyParams(b=_exp(-p * log_a), d=float(d), p=float(p))


# ============================================================================
# Dispatch by parametrization tag
# ============================================================================

_TO_CANONICAL = {
    Parametrization.CANONICAL: from_canonical,
    Parametrization.WIKIPEDIA: from_wikipedia,
    Parametrization.STACY: from_stacy,
}

_FROM_CANONICAL = {
    Parametrization.CANONICAL: to_canonical,
    Parametrization.WIKIPEDIA: to_wikipedia,
    Parametrization.STACY: to_stacy,
}


def convert_to_canonical(parametrization, p1, p2, p3) -> CanonicalParams:
    """
    Convert a triple given in ``parametrization`` to canonical parameters.

    Parameters
    ----------
    parametrization : Parametrization or str
        Which convention ``(p1, p2, p3)`` follow.
    p1, p2, p3 : float
        The parameter triple, in the field order of that convention.

    Returns
    -------
    params : CanonicalParams
    """
    parametrization = Parametrization.coerce(parametrization)
    return _TO_CANONICAL[parametrization](p1, p2, p3)


def convert_from_canonical(parametrization, mu, sigma, Q):
    """
    Express canonical parameters in ``parametrization``.

    Returns
    -------
    params : CanonicalParams, WikipediaParams or StacyParams
    """
    parametrization = Parametrization.coerce(parametrization)
    return _FROM_CANONICAL[parametrization](mu, sigma, Q)


__all__ = [
    "validate_canonical",
    "validate_wikipedia",
    "validate_stacy",
    "log_scale",
    "from_canonical",
    "from_wikipedia",
    "from_stacy",
    "to_canonical",
    "to_wikipedia",
    "to_stacy",
    "convert_to_canonical",
    "convert_from_canonical",
]
