"""Tests for correlation and cross-factorial moment."""

import numpy as np
import pytest

from bivgeo import (
    ParameterDomainError,
    correlation,
    cross_moment,
    marginal_means,
    sample_shock_model,
)


class TestSummaryStatistics:
    """Test closed-form statistics."""

    def test_correlation_literal(self):
        """correlation(0.5, 0.5, 0.7) = 0.15 / 0.825."""
        assert abs(correlation((0.5, 0.5, 0.7)) - 0.1818182) < 1e-7

    def test_cross_moment_literal(self):
        """cross_moment(0.5, 0.5, 0.7) = 0.8775 / 0.3485625."""
        assert abs(cross_moment((0.5, 0.5, 0.7)) - 2.517483) < 1e-6

    def test_correlation_zero_when_independent(self):
        """theta3 = 1 gives zero correlation."""
        assert correlation((0.3, 0.8, 1.0)) == 0.0

    def test_cross_moment_factorizes_when_independent(self):
        """With theta3 = 1, E[XY] = E[X] E[Y]."""
        theta = (0.3, 0.8, 1.0)
        mean_x, mean_y = marginal_means(theta)
        assert abs(cross_moment(theta) - mean_x * mean_y) < 1e-12

    def test_correlation_in_unit_interval(self):
        """Correlation is non-negative and below one."""
        rs = np.random.RandomState(0)
        for _ in range(200):
            theta = (rs.uniform(0.01, 0.99), rs.uniform(0.01, 0.99), rs.uniform(0.01, 1.0))
            assert 0.0 <= correlation(theta) < 1.0

    def test_marginal_means(self):
        """Geometric means 1 / (1 - theta_i theta3)."""
        mean_x, mean_y = marginal_means((0.5, 0.5, 0.7))
        assert abs(mean_x - 1 / 0.65) < 1e-12
        assert abs(mean_y - 1 / 0.65) < 1e-12

    def test_consistent_with_covariance(self):
        """correlation = (E[XY] - E[X]E[Y]) / (sd(X) sd(Y))."""
        theta = (0.4, 0.6, 0.8)
        g1, g2 = 0.4 * 0.8, 0.6 * 0.8
        mean_x, mean_y = marginal_means(theta)
        sd_x = np.sqrt(g1) / (1 - g1)
        sd_y = np.sqrt(g2) / (1 - g2)
        implied = (cross_moment(theta) - mean_x * mean_y) / (sd_x * sd_y)
        assert abs(implied - correlation(theta)) < 1e-12

    def test_monte_carlo_agreement(self):
        """Sample moments of a large sample match the closed forms."""
        theta = (0.5, 0.5, 0.7)
        data = sample_shock_model(200000, theta, random_state=2718)
        x, y = data[:, 0].astype(float), data[:, 1].astype(float)
        assert abs(np.mean(x * y) - cross_moment(theta)) < 0.05
        assert abs(np.corrcoef(x, y)[0, 1] - correlation(theta)) < 0.02

    def test_repeated_calls_identical(self):
        """Pure functions return bit-identical results."""
        theta = (0.25, 0.75, 0.6)
        assert correlation(theta) == correlation(theta)
        assert cross_moment(theta) == cross_moment(theta)

    @pytest.mark.parametrize("func", [correlation, cross_moment, marginal_means])
    @pytest.mark.parametrize("theta,name", [
        ((1.0, 0.5, 0.7), 'theta1'),
        ((0.5, 0.0, 0.7), 'theta2'),
        ((0.5, 0.5, 1.5), 'theta3'),
    ])
    def test_parameter_validation(self, func, theta, name):
        """Out-of-bounds parameters are named in the error."""
        with pytest.raises(ParameterDomainError) as excinfo:
            func(theta)
        assert excinfo.value.parameter_name == name


if __name__ == "__main__":
    pytest.main([__file__])
