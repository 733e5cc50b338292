"""Goodness-of-fit checks for samples of the bivariate geometric law.

Used to validate the generators against the closed-form probability
functions and against each other.
"""

from typing import Any, NamedTuple, Tuple

import numpy as np
from scipy import stats

from ..core.distributions import _joint_cdf
from ..core.exceptions import ValidationError
from ..core.observations import as_observations
from ..core.parameters import validate_theta


class GofResult(NamedTuple):
    """Statistic and p-value of a test."""
    statistic: float
    p_value: float


class GoodnessOfFitTester:
    """Statistical tests comparing samples to the model."""

    @staticmethod
    def geometric_chisquare(values: np.ndarray, success_prob: float,
                            min_expected: float = 5.0) -> GofResult:
        """Chi-square test of integer data against Geometric(success_prob) on {1, 2, ...}.

        Cells k = 1, 2, ... are kept while their expected count is at least
        ``min_expected``; the remaining upper tail forms the last cell.
        """
        values = np.asarray(values, dtype=np.int64)
        n = values.size
        if n == 0:
            raise ValidationError("cannot test an empty sample", field_name='values')

        last = 1
        while n * stats.geom.pmf(last + 1, success_prob) >= min_expected:
            last += 1
        if last < 2:
            raise ValidationError(
                "sample too small for a chi-square test with at least two cells",
                field_name='values',
                field_value=n,
            )

        cells = np.arange(1, last)
        expected = n * stats.geom.pmf(cells, success_prob)
        expected = np.append(expected, n * stats.geom.sf(last - 1, success_prob))

        clipped = np.minimum(values, last)
        observed = np.bincount(clipped, minlength=last + 1)[1:]

        # rescale away round-off so both totals match exactly
        expected *= observed.sum() / expected.sum()
        statistic, p_value = stats.chisquare(observed, expected)
        return GofResult(float(statistic), float(p_value))

    @classmethod
    def marginal_test(cls, sample: Any, theta: Any, component: str = "x") -> GofResult:
        """Test a margin of ``sample`` against its geometric law.

        X is geometric with success probability 1 - theta1*theta3 and Y with
        1 - theta2*theta3.
        """
        t = validate_theta(theta)
        obs = as_observations(sample, min_value=1)
        if component == "x":
            return cls.geometric_chisquare(obs.x, 1.0 - t.gamma1)
        elif component == "y":
            return cls.geometric_chisquare(obs.y, 1.0 - t.gamma2)
        else:
            raise ValueError(f"Unknown component: {component}")

    @staticmethod
    def empirical_cdf(sample: Any, x: int, y: int) -> float:
        """Share of observations with X <= x and Y <= y."""
        obs = as_observations(sample, min_value=1)
        return float(np.mean((obs.x <= x) & (obs.y <= y)))

    @classmethod
    def cdf_z_score(cls, sample: Any, x: int, y: int, theta: Any) -> float:
        """Standardized difference between the empirical and closed-form cdf at (x, y).

        Uses the binomial standard error of the closed-form probability.
        """
        t = validate_theta(theta)
        n = len(as_observations(sample, min_value=1))
        expected = float(_joint_cdf(np.int64(x), np.int64(y), t))
        observed = cls.empirical_cdf(sample, x, y)
        se = np.sqrt(expected * (1 - expected) / n)
        return float((observed - expected) / se)

    @staticmethod
    def two_sample_test(sample_a: Any, sample_b: Any, max_value: int = 6) -> GofResult:
        """Chi-square homogeneity test of two samples over the (x, y) lattice.

        Values above ``max_value`` are pooled into one cell per axis.
        """
        tables = []
        for sample in (sample_a, sample_b):
            obs = as_observations(sample, min_value=1)
            cx = np.minimum(obs.x, max_value) - 1
            cy = np.minimum(obs.y, max_value) - 1
            counts = np.bincount(cx * max_value + cy, minlength=max_value * max_value)
            tables.append(counts)

        table = np.vstack(tables)
        table = table[:, table.sum(axis=0) > 0]
        statistic, p_value, _, _ = stats.chi2_contingency(table)
        return GofResult(float(statistic), float(p_value))


def marginal_chisquare(sample: Any, theta: Any, component: str = "x") -> Tuple[float, float]:
    """Convenience wrapper for ``GoodnessOfFitTester.marginal_test``."""
    return GoodnessOfFitTester.marginal_test(sample, theta, component)
