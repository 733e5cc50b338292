"""Basu-Dhar bivariate geometric distribution.

Probability functions, cure-fraction extension, summary statistics,
method-of-moments estimation and two random variate generators.
"""

__version__ = "1.0.0"
__author__ = "bivgeo developers"

# Probability functions
from .core.distributions import (
    BivariateGeometric,
    cdf,
    conditional_pmf,
    conditional_sf,
    marginal_pmf,
    pmf,
    pmf_cases,
    sf,
)
from .core.cure import CureFractionGeometric, cdf_cure, pmf_cure, sf_cure
from .core.statistics import correlation, cross_moment, marginal_means

# Random variate generation
from .core.sampler import (
    BivariateGeometricSampler,
    InverseTransformSampler,
    ShockModelSampler,
    sample_inverse_transform,
    sample_shock_model,
)
from .core.config import SamplerConfig

# Parameters and data
from .core.parameters import CureFractions, Theta
from .core.observations import Observations

# Estimation
from .fit.moments import MomentEstimate, MomentEstimator, moment_estimate

# Exception handling
from .core.exceptions import (
    BivGeoError,
    ComputationError,
    ConfigurationError,
    InversionError,
    ObservationError,
    ParameterDomainError,
    ValidationError,
)

# Logging configuration
from .core.logging_config import get_logger, setup_logging

__all__ = [
    # Probability functions
    "pmf", "pmf_cases", "cdf", "sf",
    "marginal_pmf", "conditional_pmf", "conditional_sf",
    "BivariateGeometric",
    "pmf_cure", "cdf_cure", "sf_cure", "CureFractionGeometric",
    "correlation", "cross_moment", "marginal_means",
    # Sampling
    "sample_inverse_transform", "sample_shock_model",
    "InverseTransformSampler", "ShockModelSampler", "BivariateGeometricSampler",
    "SamplerConfig",
    # Parameters and data
    "Theta", "CureFractions", "Observations",
    # Estimation
    "moment_estimate", "MomentEstimator", "MomentEstimate",
    # Exception handling
    "BivGeoError", "ValidationError", "ParameterDomainError", "ObservationError",
    "ComputationError", "InversionError", "ConfigurationError",
    # Logging
    "setup_logging", "get_logger",
]
