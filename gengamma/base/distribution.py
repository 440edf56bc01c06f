"""
Base class for probability distributions with scipy-like API.

This module provides an abstract base class that defines the standard interface
for continuous univariate distributions, similar to ``scipy.stats``.

The API includes:

- **Density functions**: :meth:`pdf`, :meth:`logpdf`
- **Cumulative distribution**: :meth:`cdf`, :meth:`sf` (survival function)
- **Quantile functions**: :meth:`ppf`, :meth:`isf` (inverse survival)
- **Random sampling**: :meth:`rvs`
- **Moments**: :meth:`mean`, :meth:`var`, :meth:`std`, :meth:`stats`
- **Shape**: :meth:`mode`, :meth:`support`
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray


def _resolve_rng(random_state) -> np.random.Generator:
    """Turn ``None``, an int seed or a Generator into a Generator."""
    if random_state is None:
        return np.random.default_rng()
    if isinstance(random_state, (int, np.integer)):
        return np.random.default_rng(random_state)
    return random_state


def _as_output(result, x):
    """Return a float for scalar ``x``, the array otherwise."""
    if np.ndim(x) == 0:
        return float(result)
    return result


class Distribution(ABC):
    """
    Abstract base class for continuous univariate distributions.

    This class defines the standard API for probability distributions,
    similar to scipy.stats distributions. All concrete distributions
    should inherit from this class.

    The API includes:
    - pdf: Probability density function
    - logpdf: Log of the probability density function
    - cdf, logcdf, sf, logsf: Cumulative and survival functions
    - ppf, isf: Quantile functions
    - rvs: Random variate sampling
    - stats: Return moments (mean, variance)
    - mean, var, std: Moments
    - mode: Location of the density maximum
    - support: Interval outside which the density is zero
    - median, interval: Quantile-based summaries
    - score: Mean log-likelihood of data

    Methods that a subclass cannot provide raise ``NotImplementedError``.
    """

    @abstractmethod
    def pdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Probability density function.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the PDF.

        Returns
        -------
        pdf : ndarray or float
            Probability density at each point.
        """

    @abstractmethod
    def logpdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Log of the probability density function.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the log PDF.

        Returns
        -------
        logpdf : ndarray or float
            ``-inf`` outside the support.
        """

    def cdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Cumulative distribution function.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the CDF.

        Returns
        -------
        cdf : ndarray or float
            Cumulative probability at each point.
        """
        raise NotImplementedError("CDF not implemented for this distribution")

    def logcdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """Log of the cumulative distribution function."""
        return np.log(self.cdf(x))

    def sf(self, x: ArrayLike) -> NDArray[np.floating]:
        """Survival function (1 - CDF)."""
        return 1.0 - self.cdf(x)

    def logsf(self, x: ArrayLike) -> NDArray[np.floating]:
        """Log of the survival function."""
        return np.log(self.sf(x))

    def ppf(self, q: ArrayLike) -> NDArray[np.floating]:
        """
        Percent point function (inverse of CDF).

        Parameters
        ----------
        q : array_like
            Probabilities at which to evaluate the PPF.

        Returns
        -------
        ppf : ndarray or float
            Quantiles corresponding to the given probabilities.
        """
        raise NotImplementedError("PPF not implemented for this distribution")

    def isf(self, q: ArrayLike) -> NDArray[np.floating]:
        """Inverse survival function (inverse of SF)."""
        return self.ppf(1.0 - np.asarray(q))

    @abstractmethod
    def rvs(self, size: Optional[Union[int, tuple]] = None,
            random_state: Optional[Union[int, np.random.Generator]] = None):
        """
        Random variate sampling.

        Parameters
        ----------
        size : int or tuple of ints, optional
            Shape of the output. If None, returns a scalar.
        random_state : int or numpy.random.Generator, optional
            Random state for reproducibility.

        Returns
        -------
        rvs : ndarray or float
            Random variates.
        """

    def stats(self, moments: str = 'mv') -> Union[float, Tuple[float, ...]]:
        """
        Return moments of the distribution.

        Parameters
        ----------
        moments : str, optional
            Composed of letters ['mv'] defining which moments to compute:
            'm' = mean, 'v' = variance. Default is 'mv'.

        Returns
        -------
        stats : float or tuple
            Requested moments.
        """
        results = []
        if 'm' in moments:
            results.append(self.mean())
        if 'v' in moments:
            results.append(self.var())

        if len(results) == 1:
            return results[0]
        return tuple(results)

    def mean(self) -> float:
        """Mean of the distribution."""
        raise NotImplementedError("Mean not implemented for this distribution")

    def var(self) -> float:
        """Variance of the distribution."""
        raise NotImplementedError("Variance not implemented for this distribution")

    def std(self) -> float:
        """Standard deviation of the distribution."""
        return float(np.sqrt(self.var()))

    def mode(self) -> float:
        """Mode of the distribution."""
        raise NotImplementedError("Mode not implemented for this distribution")

    @abstractmethod
    def support(self) -> Tuple[float, float]:
        """
        Support of the distribution.

        Returns
        -------
        a, b : float
            Lower and upper end of the support.
        """

    def median(self) -> float:
        """Median of the distribution."""
        return self.ppf(0.5)

    def interval(self, alpha: float) -> Tuple[float, float]:
        """
        Confidence interval with equal areas around the median.

        Parameters
        ----------
        alpha : float
            Confidence level (between 0 and 1).

        Returns
        -------
        a, b : tuple of floats
            Lower and upper bounds of the confidence interval.
        """
        lower = self.ppf((1 - alpha) / 2)
        upper = self.ppf((1 + alpha) / 2)
        return lower, upper

    def score(self, X: ArrayLike, y: Optional[ArrayLike] = None) -> float:
        """
        Compute the mean log-likelihood (sklearn-style scoring).

        Parameters
        ----------
        X : array_like
            Data samples.
        y : array_like, optional
            Ignored. Present for sklearn API compatibility.

        Returns
        -------
        score : float
            Mean log-likelihood.
        """
        X = np.asarray(X, dtype=float)
        return float(np.mean(self.logpdf(X)))

    def __repr__(self) -> str:
        """String representation of the distribution."""
        return f"{self.__class__.__name__}()"
