"""Univariate distributions."""

from .gamma import Gamma
from .generalized_gamma import GeneralizedGamma

__all__ = ['Gamma', 'GeneralizedGamma']
