"""Estimation and goodness-of-fit for the bivariate geometric law."""

from .moments import MomentEstimate, MomentEstimator, moment_estimate
from .goodness_of_fit import GofResult, GoodnessOfFitTester, marginal_chisquare

__all__ = [
    'MomentEstimate', 'MomentEstimator', 'moment_estimate',
    'GofResult', 'GoodnessOfFitTester', 'marginal_chisquare',
]
