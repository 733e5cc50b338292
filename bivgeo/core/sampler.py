"""Random variate generation for the Basu-Dhar bivariate geometric law.

Two independent generators produce the same target distribution:

* ``InverseTransformSampler`` draws X from its geometric margin and then Y
  from the conditional law of Y given X = x by inverting the conditional
  cdf with a lazily extended search over y = 1, 2, 3, ...
* ``ShockModelSampler`` uses the shock construction: with independent
  geometric R1, R2, R3, X = min(R1, R3) and Y = min(R2, R3).

Both return an (n, 2) int64 array with X in column 0 and Y in column 1.
"""

import numbers
from typing import Any, Optional, Union

import numpy as np

from .config import SamplerConfig
from .distributions import _conditional_pmf, _conditional_sf
from .exceptions import InversionError
from .logging_config import get_logger, log_performance
from .parameters import validate_theta

logger = get_logger(__name__)

RandomStateLike = Union[None, int, np.random.RandomState, np.random.Generator]

# A draw whose remaining conditional tail mass is below this is resolved
# at the current candidate.
TAIL_EPSILON = np.finfo(float).eps


def check_random_state(random_state: RandomStateLike) -> Union[np.random.RandomState, np.random.Generator]:
    """Turn ``random_state`` into a random number generator.

    Args:
        random_state: None (fresh entropy), an integer seed, or an existing
            ``RandomState``/``Generator`` which is used (and advanced) as is

    Returns:
        Random number generator
    """
    if random_state is None or isinstance(random_state, numbers.Integral):
        return np.random.RandomState(random_state)
    if isinstance(random_state, (np.random.RandomState, np.random.Generator)):
        return random_state
    raise ValueError(f"Cannot use {random_state!r} as a random state")


class InverseTransformSampler:
    """Marginal-then-conditional inverse-cdf sampler."""

    def __init__(self, theta: Any, max_search_steps: int = 1_000_000):
        """Initialize sampler.

        Args:
            theta: Parameters (theta1, theta2, theta3)
            max_search_steps: Candidate y values examined beyond max(x)
                before the search is declared inconsistent
        """
        self.theta = validate_theta(theta)
        self.max_search_steps = max_search_steps

    def sample(self, n: int, random_state: RandomStateLike = None) -> np.ndarray:
        """Generate ``n`` observations.

        Args:
            n: Number of observations
            random_state: Seed or random number generator

        Returns:
            Array of shape (n, 2)
        """
        rs = check_random_state(random_state)
        x = rs.geometric(1.0 - self.theta.gamma1, size=n).astype(np.int64)
        u = rs.uniform(0.0, 1.0, size=n)
        y = self.invert(x, u)
        return np.column_stack([x, y])

    def invert(self, x: np.ndarray, u: np.ndarray) -> np.ndarray:
        """Invert the conditional cdf of Y given X = x at the uniforms ``u``.

        Y is the first candidate j with ``cum(j - 1) <= u < cum(j)``, where
        ``cum`` accumulates P(Y = j | X = x) over j = 1, 2, 3, ... The
        search runs for all draws at once, dropping each draw as soon as it
        is resolved.

        Args:
            x: Drawn values of X (>= 1)
            u: Uniform variates in [0, 1), one per draw

        Returns:
            int64 array of Y values

        Raises:
            InversionError: If some draw is unresolved after the step budget
        """
        x = np.asarray(x, dtype=np.int64)
        u = np.asarray(u, dtype=float)
        y = np.zeros(x.shape, dtype=np.int64)
        cum = np.zeros(x.shape, dtype=float)
        active = np.arange(x.size)

        step_limit = int(x.max(initial=0)) + self.max_search_steps
        j = 0
        while active.size:
            j += 1
            if j > step_limit:
                raise InversionError(
                    f"Conditional inversion did not terminate after {step_limit} candidates",
                    steps_taken=step_limit,
                    unresolved_draws=int(active.size),
                    context={'theta': self.theta.as_tuple()},
                )

            xa = x[active]
            candidate = np.full(xa.shape, j, dtype=np.int64)
            cum_a = cum[active] + _conditional_pmf(candidate, xa, self.theta)
            cum[active] = cum_a

            resolved = (u[active] < cum_a) | (_conditional_sf(candidate, xa, self.theta) < TAIL_EPSILON)
            y[active[resolved]] = j
            active = active[~resolved]

        logger.debug(f"Conditional inversion resolved {x.size} draws in {j} steps")
        return y


class ShockModelSampler:
    """Shock-model sampler: componentwise minima of three geometric shocks."""

    def __init__(self, theta: Any):
        self.theta = validate_theta(theta)

    def sample(self, n: int, random_state: RandomStateLike = None) -> np.ndarray:
        """Generate ``n`` observations.

        Args:
            n: Number of observations
            random_state: Seed or random number generator

        Returns:
            Array of shape (n, 2)
        """
        rs = check_random_state(random_state)
        t1, t2, t3 = self.theta.as_tuple()

        r1 = rs.geometric(1.0 - t1, size=n).astype(np.int64)
        r2 = rs.geometric(1.0 - t2, size=n).astype(np.int64)
        if t3 < 1.0:
            r3 = rs.geometric(1.0 - t3, size=n).astype(np.int64)
            return np.column_stack([np.minimum(r1, r3), np.minimum(r2, r3)])

        # theta3 == 1: the common shock never arrives
        return np.column_stack([r1, r2])


class BivariateGeometricSampler:
    """Configured entry point dispatching to one of the two generators."""

    def __init__(self, theta: Any, config: Optional[SamplerConfig] = None):
        self.theta = validate_theta(theta)
        self.config = config or SamplerConfig()

        if self.config.method == "inverse":
            self._generator = InverseTransformSampler(
                self.theta, max_search_steps=self.config.max_search_steps
            )
        else:
            self._generator = ShockModelSampler(self.theta)

    @log_performance
    def sample(self, random_state: RandomStateLike = None) -> np.ndarray:
        """Generate ``config.n_samples`` observations.

        Args:
            random_state: Seed or generator; defaults to ``config.random_seed``

        Returns:
            Array of shape (n_samples, 2)
        """
        if random_state is None:
            random_state = self.config.random_seed

        logger.debug(
            f"Sampling {self.config.n_samples} observations",
            extra={'method': self.config.method, 'n_samples': self.config.n_samples},
        )
        return self._generator.sample(self.config.n_samples, random_state)


def sample(n: int, theta: Any, method: str = "inverse",
           random_state: RandomStateLike = None) -> np.ndarray:
    """Draw ``n`` observations with the chosen generator."""
    t = validate_theta(theta)
    config = SamplerConfig.create(n_samples=n, method=method)
    return BivariateGeometricSampler(t, config).sample(random_state=random_state)


def sample_inverse_transform(n: int, theta: Any, random_state: RandomStateLike = None) -> np.ndarray:
    """Draw ``n`` observations by inverse-transform sampling.

    Example:
        >>> data = sample_inverse_transform(1000, (0.5, 0.5, 0.7), random_state=42)
        >>> data.shape
        (1000, 2)
    """
    return sample(n, theta, method="inverse", random_state=random_state)


def sample_shock_model(n: int, theta: Any, random_state: RandomStateLike = None) -> np.ndarray:
    """Draw ``n`` observations from the shock model."""
    return sample(n, theta, method="shock", random_state=random_state)
