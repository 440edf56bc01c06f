"""
Parametrization tags and frozen dataclass parameter containers.

The generalized gamma distribution is published under three equivalent
parametrizations. :class:`Parametrization` selects one of them, and each has
a frozen dataclass holding its triple:

- :class:`CanonicalParams` ``(mu, sigma, Q)``: the Prentice (1974) log-gamma
  form used by the R package ``flexsurv``. Sampling is done in this form.
- :class:`WikipediaParams` ``(a, d, p)``: scale ``a`` and shapes ``d``, ``p``.
- :class:`StacyParams` ``(b, d, p)``: Stacy (1962), with ``b = a^{-p}``.

All containers use ``slots=True`` and ``frozen=True``. They support both
attribute access and dict-style access, and unpack in field order:

Examples
--------
>>> from gengamma.params import WikipediaParams
>>> p = WikipediaParams(a=1.0, d=2.0, p=1.5)
>>> p.d
2.0
>>> p['a']
1.0
>>> a, d, p_ = p
>>> p.a = 3.0  # Raises FrozenInstanceError
"""

from dataclasses import dataclass, fields
from enum import Enum


class Parametrization(Enum):
    """
    Selector for one of the three parametrizations.

    The members carry no state. They only route construction and
    :meth:`GeneralizedGamma.params` to the matching conversion formula.
    String values are accepted wherever a tag is, e.g. ``"stacy"``.
    """

    CANONICAL = "canonical"
    WIKIPEDIA = "wikipedia"
    STACY = "stacy"

    @classmethod
    def coerce(cls, value) -> "Parametrization":
        """Return ``value`` as a member, accepting member names or values."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key == "flexsurv":
                return cls.CANONICAL
            return cls(key)
        raise ValueError(f"Unknown parametrization {value!r}")


class _ParamsBase:
    """Mixin providing dict-style access and unpacking on frozen dataclass params.

    Allows ``params.mu``, ``params['mu']`` and ``mu, sigma, Q = params``,
    plus ``items()``, ``keys()``, ``values()`` for iteration.
    """

    __slots__ = ()

    def __getitem__(self, key: str):
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key)

    def __contains__(self, key: str) -> bool:
        return key in self.keys()

    def __iter__(self):
        return iter(self.values())

    def __len__(self) -> int:
        return len(fields(self))

    def keys(self):
        """Return field names."""
        return tuple(f.name for f in fields(self))

    def values(self):
        """Return field values."""
        return tuple(getattr(self, f.name) for f in fields(self))

    def items(self):
        """Return ``(name, value)`` pairs."""
        return tuple((f.name, getattr(self, f.name)) for f in fields(self))


@dataclass(frozen=True, slots=True)
class CanonicalParams(_ParamsBase):
    """
    Canonical (flexsurv) parameters of the generalized gamma distribution.

    Attributes
    ----------
    mu : float
        Location of :math:`\\log X`, any real value.
    sigma : float
        Spread of :math:`\\log X`, :math:`\\sigma > 0`.
    Q : float
        Shape parameter, :math:`Q \\neq 0`.
    """
    mu: float
    sigma: float
    Q: float


@dataclass(frozen=True, slots=True)
class WikipediaParams(_ParamsBase):
    """
    Wikipedia parameters of the generalized gamma distribution.

    Attributes
    ----------
    a : float
        Scale parameter :math:`a > 0`.
    d : float
        Shape parameter, nonzero, same sign as ``p``.
    p : float
        Shape parameter, nonzero, same sign as ``d``.
    """
    a: float
    d: float
    p: float


@dataclass(frozen=True, slots=True)
class StacyParams(_ParamsBase):
    """
    Stacy parameters of the generalized gamma distribution.

    Attributes
    ----------
    b : float
        Rate-like parameter :math:`b = a^{-p} > 0`.
    d : float
        Shape parameter, nonzero, same sign as ``p``.
    p : float
        Shape parameter, nonzero, same sign as ``d``.
    """
    b: float
    d: float
    p: float


@dataclass(frozen=True, slots=True)
class GammaParams(_ParamsBase):
    """
    Classical parameters for the Gamma distribution.

    Attributes
    ----------
    shape : float
        Shape parameter :math:`\\alpha > 0`.
    rate : float
        Rate parameter :math:`\\beta > 0`.
    """
    shape: float
    rate: float


__all__ = [
    "Parametrization",
    "CanonicalParams",
    "WikipediaParams",
    "StacyParams",
    "GammaParams",
]
