"""Core probability kernel and samplers."""

from .distributions import (
    BivariateGeometric, sf, cdf, pmf, pmf_cases,
    marginal_pmf, conditional_pmf, conditional_sf,
)
from .cure import CureFractionGeometric, pmf_cure, cdf_cure, sf_cure
from .statistics import correlation, cross_moment, marginal_means
from .sampler import (
    InverseTransformSampler, ShockModelSampler, BivariateGeometricSampler,
    check_random_state, sample, sample_inverse_transform, sample_shock_model,
)
from .config import SamplerConfig
from .parameters import Theta, CureFractions, validate_theta, validate_phi, validate_phi11
from .observations import Observations, as_observations
from .regimes import Regime, classify_regimes

from .exceptions import (
    BivGeoError, ValidationError, ParameterDomainError, ObservationError,
    ComputationError, InversionError, ConfigurationError,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    'BivariateGeometric', 'sf', 'cdf', 'pmf', 'pmf_cases',
    'marginal_pmf', 'conditional_pmf', 'conditional_sf',
    'CureFractionGeometric', 'pmf_cure', 'cdf_cure', 'sf_cure',
    'correlation', 'cross_moment', 'marginal_means',
    'InverseTransformSampler', 'ShockModelSampler', 'BivariateGeometricSampler',
    'check_random_state', 'sample', 'sample_inverse_transform', 'sample_shock_model',
    'SamplerConfig',
    'Theta', 'CureFractions', 'validate_theta', 'validate_phi', 'validate_phi11',
    'Observations', 'as_observations',
    'Regime', 'classify_regimes',
    'BivGeoError', 'ValidationError', 'ParameterDomainError', 'ObservationError',
    'ComputationError', 'InversionError', 'ConfigurationError',
    'setup_logging', 'get_logger',
]
