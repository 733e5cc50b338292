"""Cure-fraction extension of the Basu-Dhar bivariate geometric law.

A share phi11 of the population is susceptible in both components, phi10
only in X, phi01 only in Y and phi00 in neither; a component that is not
susceptible never fails. The joint survival function is the mixture

    S(x, y) = phi11 * S0(x, y) + phi10 * (theta1*theta3)^x
              + phi01 * (theta2*theta3)^y + phi00

with S0 the survival function of the base distribution.
"""

from typing import Any, Optional

import numpy as np

from .distributions import ArrayOrFloat, _log_or_identity, _pmf_difference, _survival
from .observations import as_observations
from .parameters import CureFractions, Theta, validate_phi, validate_phi11, validate_theta


def _cure_survival(x: np.ndarray, y: np.ndarray, t: Theta, phi) -> np.ndarray:
    phi11, phi10, phi01, phi00 = phi
    return (phi11 * _survival(x, y, t) + phi10 * t.gamma1 ** x
            + phi01 * t.gamma2 ** y + phi00)


def _cure_cdf(x: np.ndarray, y: np.ndarray, t: Theta, phi) -> np.ndarray:
    phi11, phi10, phi01, phi00 = phi
    sfx = (phi11 + phi10) * t.gamma1 ** x + (phi01 + phi00)
    sfy = (phi11 + phi01) * t.gamma2 ** y + (phi10 + phi00)
    return 1.0 - sfx - sfy + _cure_survival(x, y, t, phi)


def pmf_cure(x: Any, y: Any = None, theta: Any = (), phi11: Optional[float] = None,
             log: bool = False) -> ArrayOrFloat:
    """Joint pmf of the cure-fraction model for units failing in both components.

    Args:
        x: Values of x (>= 1), or a two-column table of (x, y) when y is None
        y: Values of y (>= 1)
        theta: Parameters (theta1, theta2, theta3)
        phi11: Share susceptible in both components, in (0, 1)
        log: Return the natural logarithm

    Returns:
        phi11 times the base pmf
    """
    t = validate_theta(theta)
    weight = validate_phi11(phi11)
    obs = as_observations(x, y, min_value=1)
    return obs.wrap(_log_or_identity(weight * _pmf_difference(obs.x, obs.y, t), log))


def cdf_cure(x: Any, y: Any = None, theta: Any = (), phi: Any = (),
             lower_tail: bool = True) -> ArrayOrFloat:
    """Joint cdf of the cure-fraction model.

    Args:
        x: Values of x, or a two-column table of (x, y) when y is None
        y: Values of y
        theta: Parameters (theta1, theta2, theta3)
        phi: Mixing weights (phi11, phi10, phi01, phi00), summing to 1
        lower_tail: If True return P(X <= x, Y <= y), otherwise P(X > x, Y > y)

    Returns:
        Probabilities
    """
    t = validate_theta(theta)
    weights = validate_phi(phi).as_tuple()
    obs = as_observations(x, y, min_value=0)
    if lower_tail:
        return obs.wrap(_cure_cdf(obs.x, obs.y, t, weights))
    return obs.wrap(_cure_survival(obs.x, obs.y, t, weights))


def sf_cure(x: Any, y: Any = None, theta: Any = (), phi: Any = (),
            lower_tail: bool = False) -> ArrayOrFloat:
    """Joint survival function of the cure-fraction model.

    Same as ``cdf_cure`` with the upper tail as default.
    """
    return cdf_cure(x, y, theta, phi, lower_tail=lower_tail)


class CureFractionGeometric:
    """Cure-fraction Basu-Dhar distribution with fixed parameters."""

    def __init__(self, theta: Any, phi: Any):
        self.theta = validate_theta(theta)
        self.phi: CureFractions = validate_phi(phi)

    def pmf(self, x: Any, y: Any = None, log: bool = False) -> ArrayOrFloat:
        return pmf_cure(x, y, self.theta, self.phi.phi11, log=log)

    def cdf(self, x: Any, y: Any = None, lower_tail: bool = True) -> ArrayOrFloat:
        return cdf_cure(x, y, self.theta, self.phi, lower_tail=lower_tail)

    def sf(self, x: Any, y: Any = None) -> ArrayOrFloat:
        return sf_cure(x, y, self.theta, self.phi)

    def cured_fraction(self) -> float:
        """Probability that neither component ever fails, P(X = inf, Y = inf)."""
        return self.phi.phi00
