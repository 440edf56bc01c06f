"""Distributions provided by gengamma."""

from .univariate import Gamma, GeneralizedGamma

__all__ = ['Gamma', 'GeneralizedGamma']
