"""Tests for the random variate generators.

Both generators are validated against the closed-form cdf and the
geometric margins, and against each other.
"""

import numpy as np
import pytest

from bivgeo import (
    BivariateGeometricSampler,
    ConfigurationError,
    InverseTransformSampler,
    InversionError,
    ParameterDomainError,
    SamplerConfig,
    ShockModelSampler,
    cdf,
    conditional_sf,
    moment_estimate,
    sample_inverse_transform,
    sample_shock_model,
)
from bivgeo.core.sampler import check_random_state
from bivgeo.fit.goodness_of_fit import GoodnessOfFitTester

THETA = (0.5, 0.5, 0.7)


class TestSamplerBasics:
    """Test output shape, support and reproducibility."""

    @pytest.mark.parametrize("sampler", [sample_inverse_transform, sample_shock_model])
    def test_shape_and_support(self, sampler):
        """Output is an (n, 2) integer array on {1, 2, ...}^2."""
        data = sampler(5000, THETA, random_state=42)
        assert data.shape == (5000, 2)
        assert data.dtype == np.int64
        assert np.all(data >= 1)

    @pytest.mark.parametrize("sampler", [sample_inverse_transform, sample_shock_model])
    def test_seed_reproducibility(self, sampler):
        """Same seed, same sample."""
        np.testing.assert_array_equal(sampler(1000, THETA, random_state=7),
                                      sampler(1000, THETA, random_state=7))

    @pytest.mark.parametrize("sampler", [sample_inverse_transform, sample_shock_model])
    def test_different_seeds_differ(self, sampler):
        """Different seeds give different samples."""
        assert not np.array_equal(sampler(1000, THETA, random_state=1),
                                  sampler(1000, THETA, random_state=2))

    def test_generator_accepted(self):
        """numpy Generator objects can drive the samplers."""
        data = sample_inverse_transform(500, THETA, random_state=np.random.default_rng(3))
        assert data.shape == (500, 2)

    def test_random_state_advanced(self):
        """A passed RandomState is used in place and advanced."""
        rs = np.random.RandomState(11)
        first = sample_shock_model(100, THETA, random_state=rs)
        second = sample_shock_model(100, THETA, random_state=rs)
        assert not np.array_equal(first, second)

    def test_invalid_random_state(self):
        """Unsupported random state objects are rejected."""
        with pytest.raises(ValueError):
            check_random_state("seed")

    def test_single_draw(self):
        """n = 1 works."""
        assert sample_inverse_transform(1, THETA, random_state=0).shape == (1, 2)


class TestSamplerValidation:
    """Test errors raised before sampling."""

    @pytest.mark.parametrize("sampler", [sample_inverse_transform, sample_shock_model])
    def test_invalid_theta(self, sampler):
        """Out-of-bounds parameters are domain errors."""
        with pytest.raises(ParameterDomainError) as excinfo:
            sampler(10, (0.5, 1.0, 0.7))
        assert excinfo.value.parameter_name == 'theta2'

    @pytest.mark.parametrize("n", [0, -5])
    def test_invalid_n(self, n):
        """n must be positive."""
        with pytest.raises(ConfigurationError):
            sample_inverse_transform(n, THETA)

    def test_invalid_method(self):
        """Unknown methods are rejected."""
        with pytest.raises(ConfigurationError) as excinfo:
            SamplerConfig.create(method="rejection")
        assert excinfo.value.context['config_key'] == 'method'

    def test_invalid_max_search_steps(self):
        """The search budget must be positive."""
        with pytest.raises(ConfigurationError):
            SamplerConfig.create(max_search_steps=0)


class TestInversion:
    """Test the conditional inverse-cdf search directly."""

    @pytest.fixture
    def random_state(self):
        return np.random.RandomState(2024)

    @staticmethod
    def _quantile(u, x, theta):
        # smallest j with P(Y <= j | X = x) > u, from the closed-form survival
        j = 1
        while 1 - conditional_sf(j, x, theta=theta) <= u:
            j += 1
        return j

    @pytest.mark.parametrize("theta", [(0.5, 0.5, 0.7), (0.3, 0.8, 0.9), (0.9, 0.4, 0.6), (0.6, 0.7, 1.0)])
    def test_matches_closed_form_quantile(self, theta, random_state):
        """The search returns the conditional quantile in every regime."""
        x = random_state.randint(1, 8, size=300)
        u = random_state.uniform(0.0, 1.0, size=300)
        y = InverseTransformSampler(theta).invert(x, u)
        expected = [self._quantile(ui, xi, theta) for xi, ui in zip(x, u)]
        np.testing.assert_array_equal(y, expected)

    def test_all_regimes_reached(self, random_state):
        """Draws fall below, on and above the diagonal."""
        data = sample_inverse_transform(20000, THETA, random_state=random_state)
        assert np.any(data[:, 1] < data[:, 0])
        assert np.any(data[:, 1] == data[:, 0])
        assert np.any(data[:, 1] > data[:, 0])

    def test_zero_uniform_gives_smallest_value(self):
        """u = 0 always maps to y = 1."""
        y = InverseTransformSampler(THETA).invert(np.array([1, 4, 9]), np.zeros(3))
        np.testing.assert_array_equal(y, [1, 1, 1])

    def test_uniform_near_one_terminates(self):
        """The largest double below one resolves to a finite y."""
        u = np.full(3, np.nextafter(1.0, 0.0))
        y = InverseTransformSampler((0.5, 0.9, 0.99)).invert(np.array([1, 3, 40]), u)
        assert np.all(y >= 1)

    def test_search_budget_exhausted(self):
        """An exhausted step budget raises InversionError."""
        sampler = InverseTransformSampler(THETA, max_search_steps=1)
        with pytest.raises(InversionError) as excinfo:
            sampler.invert(np.array([1]), np.array([0.999999]))
        assert excinfo.value.context['unresolved_draws'] == 1

    def test_heavy_tail_parameters(self):
        """Slow geometric decay still resolves every draw."""
        data = sample_inverse_transform(2000, (0.99, 0.99, 0.999), random_state=5)
        assert np.all(data >= 1)
        assert data[:, 1].max() > 100


class TestDistributionalAgreement:
    """Test samples against the closed-form law."""

    def test_empirical_cdf_inverse_transform(self):
        """Empirical cdf at (2, 3) matches cdf(2, 3) for n = 100,000."""
        data = sample_inverse_transform(100000, THETA, random_state=12345)
        z = GoodnessOfFitTester.cdf_z_score(data, 2, 3, THETA)
        assert abs(z) < 4

    def test_empirical_cdf_shock_model(self):
        """Shock-model empirical cdf matches the closed form."""
        data = sample_shock_model(100000, THETA, random_state=12345)
        z = GoodnessOfFitTester.cdf_z_score(data, 2, 3, THETA)
        assert abs(z) < 4

    @pytest.mark.parametrize("point", [(1, 1), (1, 4), (3, 2), (5, 5)])
    def test_empirical_cdf_grid(self, point):
        """Agreement holds across regimes of the lattice."""
        theta = (0.3, 0.8, 0.9)
        data = sample_inverse_transform(50000, theta, random_state=99)
        observed = GoodnessOfFitTester.empirical_cdf(data, *point)
        expected = cdf(point[0], point[1], theta=theta)
        se = np.sqrt(expected * (1 - expected) / 50000)
        assert abs(observed - expected) < 4 * se

    @pytest.mark.parametrize("sampler", [sample_inverse_transform, sample_shock_model])
    @pytest.mark.parametrize("component", ["x", "y"])
    def test_geometric_margins(self, sampler, component):
        """Both margins pass a chi-square test against their geometric law."""
        data = sampler(50000, THETA, random_state=31)
        result = GoodnessOfFitTester.marginal_test(data, THETA, component)
        assert result.p_value > 0.001

    def test_samplers_agree(self):
        """Inverse transform and shock model give the same joint law."""
        a = sample_inverse_transform(40000, THETA, random_state=101)
        b = sample_shock_model(40000, THETA, random_state=202)
        result = GoodnessOfFitTester.two_sample_test(a, b)
        assert result.p_value > 0.001

    def test_independence_when_theta3_is_one(self):
        """With theta3 = 1 both generators give independent margins."""
        theta = (0.6, 0.7, 1.0)
        for data in (sample_inverse_transform(30000, theta, random_state=8),
                     sample_shock_model(30000, theta, random_state=8)):
            corr = np.corrcoef(data[:, 0], data[:, 1])[0, 1]
            assert abs(corr) < 0.03
            assert GoodnessOfFitTester.marginal_test(data, theta, "y").p_value > 0.001

    @pytest.mark.parametrize("sampler", [sample_inverse_transform, sample_shock_model])
    def test_moment_estimates_recover_theta(self, sampler):
        """Method-of-moments estimates from a large sample are close to theta."""
        data = sampler(100000, THETA, random_state=77)
        estimate = moment_estimate(data)
        np.testing.assert_allclose(estimate.as_array(), THETA, atol=0.03)


class TestBivariateGeometricSampler:
    """Test the configured sampler."""

    def test_uses_configured_seed(self):
        """config.random_seed drives the sample when no state is passed."""
        config = SamplerConfig(n_samples=200, method="shock", random_seed=9)
        first = BivariateGeometricSampler(THETA, config).sample()
        second = BivariateGeometricSampler(THETA, config).sample()
        np.testing.assert_array_equal(first, second)
        assert first.shape == (200, 2)

    def test_dispatch(self):
        """method selects the generator."""
        inverse = BivariateGeometricSampler(THETA, SamplerConfig(method="inverse"))
        shock = BivariateGeometricSampler(THETA, SamplerConfig(method="SHOCK"))
        assert isinstance(inverse._generator, InverseTransformSampler)
        assert isinstance(shock._generator, ShockModelSampler)

    def test_default_config(self):
        """Defaults give 10,000 draws."""
        data = BivariateGeometricSampler(THETA).sample(random_state=1)
        assert data.shape == (10000, 2)


if __name__ == "__main__":
    pytest.main([__file__])
