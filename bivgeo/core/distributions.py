"""Closed-form probability functions of the Basu-Dhar bivariate geometric law.

With theta = (theta1, theta2, theta3) and gamma1 = theta1*theta3,
gamma2 = theta2*theta3, gamma3 = theta1*theta2*theta3:

    P(X > x, Y > y)   = theta1^x * theta2^y * theta3^max(x, y)
    P(X <= x, Y <= y) = 1 - gamma1^x - gamma2^y + P(X > x, Y > y)

All evaluators are vectorized over element-wise matched x and y, return a
float for scalar input and an ndarray otherwise.
"""

from typing import Any, Optional, Union

import numpy as np

from .exceptions import ObservationError
from .observations import as_observations
from .parameters import Theta, validate_theta
from .regimes import classify_regimes, select_by_regime

ArrayOrFloat = Union[float, np.ndarray]


def _log_or_identity(values: np.ndarray, log: bool) -> np.ndarray:
    # pmf == 0 (underflow) maps to -inf, negative round-off maps to nan
    if not log:
        return values
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.log(values)


# Unchecked evaluators. Callers pass int64 arrays and a validated Theta.

def _survival(x: np.ndarray, y: np.ndarray, t: Theta) -> np.ndarray:
    z = np.maximum(x, y)
    return t.theta1 ** x * t.theta2 ** y * t.theta3 ** z


def _joint_cdf(x: np.ndarray, y: np.ndarray, t: Theta) -> np.ndarray:
    return 1.0 - t.gamma1 ** x - t.gamma2 ** y + _survival(x, y, t)


def _pmf_difference(x: np.ndarray, y: np.ndarray, t: Theta) -> np.ndarray:
    t1, t2, t3 = t.as_tuple()
    z1 = np.maximum(x - 1, y - 1)
    z2 = np.maximum(x, y - 1)
    z3 = np.maximum(x - 1, y)
    z4 = np.maximum(x, y)

    p1 = t1 ** (x - 1) * t2 ** (y - 1) * t3 ** z1
    p2 = t1 ** x * t2 ** (y - 1) * t3 ** z2
    p3 = t1 ** (x - 1) * t2 ** y * t3 ** z3
    p4 = t1 ** x * t2 ** y * t3 ** z4
    return p1 - p2 - p3 + p4


def _pmf_cases(x: np.ndarray, y: np.ndarray, t: Theta) -> np.ndarray:
    t1, t2, _ = t.as_tuple()
    g1, g2, g3 = t.gamma1, t.gamma2, t.gamma3

    below = t2 ** (y - 1) * g1 ** (x - 1) * (1 - g1) * (1 - t2)
    at = g3 ** (x - 1) * (1 - g1 - g2 + g3)
    above = t1 ** (x - 1) * g2 ** (y - 1) * (1 - g2) * (1 - t1)
    return select_by_regime(classify_regimes(x, y), below, at, above)


def _marginal_pmf(x: np.ndarray, t: Theta) -> np.ndarray:
    return t.gamma1 ** (x - 1) * (1 - t.gamma1)


def _conditional_pmf(j: np.ndarray, x: np.ndarray, t: Theta) -> np.ndarray:
    """P(Y = j | X = x), obtained as pmf(x, j) / P(X = x)."""
    t1, t2, t3 = t.as_tuple()
    g1, g2, g3 = t.gamma1, t.gamma2, t.gamma3

    below = t2 ** (j - 1) * (1 - t2)
    at = t2 ** (x - 1) * (1 - g1 - g2 + g3) / (1 - g1)
    # theta3 exponent clipped so unused entries of the branch stay finite
    above = (1 - t1) * t2 ** (j - 1) * t3 ** np.maximum(j - x, 0) * (1 - g2) / (1 - g1)
    return select_by_regime(classify_regimes(x, j), below, at, above)


def _conditional_sf(j: np.ndarray, x: np.ndarray, t: Theta) -> np.ndarray:
    """P(Y > j | X = x) for j >= 0."""
    t1, t2, t3 = t.as_tuple()
    g1, g2 = t.gamma1, t.gamma2

    below = t2 ** j
    tail = (1 - t1) * t3 * t2 ** x * g2 ** np.maximum(j - x, 0) / (1 - g1)
    return select_by_regime(classify_regimes(x, j), below, tail, tail)


# Public API

def sf(x: Any, y: Any = None, theta: Any = ()) -> ArrayOrFloat:
    """Joint survival function P(X > x, Y > y).

    Args:
        x: Values of x, or a two-column table of (x, y) when y is None
        y: Values of y
        theta: Parameters (theta1, theta2, theta3)

    Returns:
        Survival probabilities
    """
    t = validate_theta(theta)
    obs = as_observations(x, y, min_value=0)
    return obs.wrap(_survival(obs.x, obs.y, t))


def cdf(x: Any, y: Any = None, theta: Any = (), lower_tail: bool = True) -> ArrayOrFloat:
    """Joint cumulative distribution function.

    Args:
        x: Values of x, or a two-column table of (x, y) when y is None
        y: Values of y
        theta: Parameters (theta1, theta2, theta3)
        lower_tail: If True return P(X <= x, Y <= y), otherwise P(X > x, Y > y)

    Returns:
        Probabilities
    """
    t = validate_theta(theta)
    obs = as_observations(x, y, min_value=0)
    if lower_tail:
        return obs.wrap(_joint_cdf(obs.x, obs.y, t))
    return obs.wrap(_survival(obs.x, obs.y, t))


def pmf(x: Any, y: Any = None, theta: Any = (), log: bool = False) -> ArrayOrFloat:
    """Joint probability mass function, evaluated by differencing the survival function.

    Args:
        x: Values of x (>= 1), or a two-column table of (x, y) when y is None
        y: Values of y (>= 1)
        theta: Parameters (theta1, theta2, theta3)
        log: Return the natural logarithm of the pmf

    Returns:
        Probabilities (or log-probabilities)

    Example:
        >>> pmf(1, 2, theta=(0.2, 0.4, 0.7))
        0.16128
    """
    t = validate_theta(theta)
    obs = as_observations(x, y, min_value=1)
    return obs.wrap(_log_or_identity(_pmf_difference(obs.x, obs.y, t), log))


def pmf_cases(x: Any, y: Any = None, theta: Any = (), log: bool = False) -> ArrayOrFloat:
    """Joint pmf evaluated with the closed form of each regime (x < y, x = y, x > y).

    Agrees with ``pmf`` up to floating-point round-off.
    """
    t = validate_theta(theta)
    obs = as_observations(x, y, min_value=1)
    return obs.wrap(_log_or_identity(_pmf_cases(obs.x, obs.y, t), log))


def marginal_pmf(x: Any, theta: Any = ()) -> ArrayOrFloat:
    """Marginal pmf of X, geometric on {1, 2, ...} with success probability 1 - theta1*theta3."""
    t = validate_theta(theta)
    obs = as_observations(x, x, min_value=1)
    return obs.wrap(_marginal_pmf(obs.x, t))


def conditional_pmf(j: Any, x: Any, theta: Any = ()) -> ArrayOrFloat:
    """P(Y = j | X = x)."""
    t = validate_theta(theta)
    obs = as_observations(x, j, min_value=1)
    return obs.wrap(_conditional_pmf(obs.y, obs.x, t))


def conditional_sf(j: Any, x: Any, theta: Any = ()) -> ArrayOrFloat:
    """P(Y > j | X = x)."""
    t = validate_theta(theta)
    obs = as_observations(x, j, min_value=0)
    if np.any(obs.x < 1):
        raise ObservationError("x must be >= 1 when conditioning on X = x", field_name='x')
    return obs.wrap(_conditional_sf(obs.y, obs.x, t))


class BivariateGeometric:
    """Basu-Dhar bivariate geometric distribution with fixed parameters."""

    def __init__(self, theta: Any):
        self.theta = validate_theta(theta)

    def __repr__(self) -> str:
        t1, t2, t3 = self.theta.as_tuple()
        return f"BivariateGeometric(theta1={t1}, theta2={t2}, theta3={t3})"

    def pmf(self, x: Any, y: Any = None, log: bool = False, method: str = "difference") -> ArrayOrFloat:
        if method == "difference":
            return pmf(x, y, self.theta, log=log)
        elif method == "cases":
            return pmf_cases(x, y, self.theta, log=log)
        else:
            raise ValueError(f"Unknown pmf method: {method}")

    def cdf(self, x: Any, y: Any = None, lower_tail: bool = True) -> ArrayOrFloat:
        return cdf(x, y, self.theta, lower_tail=lower_tail)

    def sf(self, x: Any, y: Any = None) -> ArrayOrFloat:
        return sf(x, y, self.theta)

    def sample(self, n: int, method: str = "inverse", random_state: Optional[Any] = None) -> np.ndarray:
        """Draw ``n`` observations as an (n, 2) int64 array."""
        from .sampler import sample
        return sample(n, self.theta, method=method, random_state=random_state)

    def correlation(self) -> float:
        from .statistics import correlation
        return correlation(self.theta)

    def cross_moment(self) -> float:
        from .statistics import cross_moment
        return cross_moment(self.theta)

    def marginal_means(self):
        from .statistics import marginal_means
        return marginal_means(self.theta)


__all__ = [
    'sf', 'cdf', 'pmf', 'pmf_cases', 'marginal_pmf', 'conditional_pmf',
    'conditional_sf', 'BivariateGeometric',
]
