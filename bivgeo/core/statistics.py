"""Closed-form summary statistics of the Basu-Dhar bivariate geometric law."""

import math
from typing import Any, Tuple

from .parameters import validate_theta


def correlation(theta: Any) -> float:
    """Pearson correlation between X and Y.

    corr(X, Y) = (1 - theta3) * sqrt(theta1 * theta2) / (1 - theta1 * theta2 * theta3)

    Args:
        theta: Parameters (theta1, theta2, theta3)

    Returns:
        Correlation coefficient in [0, 1)
    """
    t = validate_theta(theta)
    return (1 - t.theta3) * math.sqrt(t.theta1 * t.theta2) / (1 - t.gamma3)


def cross_moment(theta: Any) -> float:
    """Cross-factorial moment E[XY].

    E[XY] = (1 - theta1 * theta2 * theta3^2)
            / ((1 - theta1 * theta3) * (1 - theta2 * theta3) * (1 - theta1 * theta2 * theta3))
    """
    t = validate_theta(theta)
    numerator = 1 - t.theta1 * t.theta2 * t.theta3 ** 2
    denominator = (1 - t.gamma1) * (1 - t.gamma2) * (1 - t.gamma3)
    return numerator / denominator


def marginal_means(theta: Any) -> Tuple[float, float]:
    """Means of the geometric margins, (E[X], E[Y])."""
    t = validate_theta(theta)
    return 1 / (1 - t.gamma1), 1 / (1 - t.gamma2)
