"""Method-of-moments estimation for the Basu-Dhar bivariate geometric law.

With Z = min(X, Y), the means E[X] = 1/(1 - theta1*theta3),
E[Y] = 1/(1 - theta2*theta3) and E[Z] = 1/(1 - theta1*theta2*theta3) are
solved for theta after replacing them by the sample means.
"""

from typing import Any, NamedTuple

import numpy as np

from ..core.logging_config import get_logger
from ..core.observations import as_observations

logger = get_logger(__name__)


class MomentEstimate(NamedTuple):
    """Method-of-moments estimate of (theta1, theta2, theta3)."""
    theta1: float
    theta2: float
    theta3: float

    def as_array(self) -> np.ndarray:
        return np.array([self.theta1, self.theta2, self.theta3])

    def is_admissible(self) -> bool:
        """True when the estimate lies in the parameter space."""
        return (0.0 < self.theta1 < 1.0 and 0.0 < self.theta2 < 1.0
                and 0.0 < self.theta3 <= 1.0)


class MomentEstimator:
    """Estimates theta from a sample of (x, y) pairs.

    Estimates are not clamped; small or unusual samples can give values
    outside the parameter space, which is logged as a warning.
    """

    def fit(self, x: Any, y: Any = None) -> MomentEstimate:
        """Compute the estimate.

        Args:
            x: Values of x, or a two-column table (e.g. sampler output) when y is None
            y: Values of y

        Returns:
            MomentEstimate
        """
        obs = as_observations(x, y, min_value=1)
        z = np.minimum(obs.x, obs.y)

        xbar = float(np.mean(obs.x))
        ybar = float(np.mean(obs.y))
        zbar = float(np.mean(z))

        with np.errstate(divide='ignore', invalid='ignore'):
            theta1 = np.float64(ybar * (1 - zbar)) / (zbar * (1 - ybar))
            theta2 = np.float64(xbar * (zbar - 1)) / (zbar * (xbar - 1))
            theta3 = np.float64(zbar * (xbar - 1) * (ybar - 1)) / ((zbar - 1) * xbar * ybar)

        estimate = MomentEstimate(float(theta1), float(theta2), float(theta3))

        if not estimate.is_admissible():
            logger.warning(
                f"Moment estimate {tuple(round(v, 6) for v in estimate)} lies outside "
                f"the parameter space (n={len(obs)}, means x={xbar:.4f}, y={ybar:.4f}, min={zbar:.4f})"
            )
        return estimate


def moment_estimate(x: Any, y: Any = None) -> MomentEstimate:
    """Method-of-moments estimate of theta from paired data.

    Example:
        >>> from bivgeo import sample_shock_model
        >>> data = sample_shock_model(50000, (0.5, 0.5, 0.7), random_state=1)
        >>> est = moment_estimate(data)
    """
    return MomentEstimator().fit(x, y)
