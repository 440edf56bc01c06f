"""
Tests for the GeneralizedGamma distribution.

Covers construction in each parametrization, density normalization,
moments and their existence, the mode, special-case reductions,
sampling, and the unsupported CDF/quantile calls.
"""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.integrate import quad
from scipy.special import digamma

from gengamma import (
    Gamma,
    GeneralizedGamma,
    InvalidParameterError,
    Parametrization,
    UndefinedMomentWarning,
)
from gengamma.params import CanonicalParams, StacyParams, WikipediaParams


# Wikipedia triples (a, d, p) with finite mean and variance
WIKIPEDIA_CASES = [
    (1.0, 1.0, 1.0),
    (2.0, 3.0, 1.5),
    (1.0, 2.0, 0.7),
    (0.5, 4.0, 3.0),
    (1.0, -3.0, -1.0),
    (2.0, -5.0, -2.0),
]


class TestConstruction:
    def test_defaults(self):
        dist = GeneralizedGamma()
        assert dist.params() == CanonicalParams(mu=1.0, sigma=1.0, Q=1.0)
        assert GeneralizedGamma.from_params() == dist

    def test_properties(self):
        dist = GeneralizedGamma(mu=0.3, sigma=1.2, Q=-0.5)
        assert dist.mu == 0.3
        assert dist.sigma == 1.2
        assert dist.Q == -0.5

    def test_auxiliary_gamma(self):
        dist = GeneralizedGamma(mu=0.0, sigma=1.0, Q=0.5)
        assert isinstance(dist.gamma_dist, Gamma)
        assert_allclose(dist.gamma_dist.shape, 4.0)
        assert dist.gamma_dist.rate == 1.0
        # built once, not per call
        assert dist.gamma_dist is dist.gamma_dist

    @pytest.mark.parametrize("parametrization, triple", [
        (Parametrization.CANONICAL, (0.5, 1.5, -0.5)),
        (Parametrization.CANONICAL, (-1.0, 0.3, 2.0)),
        (Parametrization.WIKIPEDIA, (2.0, 3.0, 1.5)),
        (Parametrization.WIKIPEDIA, (1.0, -3.0, -1.0)),
        (Parametrization.STACY, (0.5, 2.0, 3.0)),
        (Parametrization.STACY, (2.0, -3.0, -1.0)),
    ])
    def test_params_roundtrip(self, parametrization, triple):
        dist = GeneralizedGamma.from_params(parametrization, *triple)
        assert_allclose(tuple(dist.params(parametrization)), triple, rtol=1e-9)

    def test_named_factories(self):
        w = GeneralizedGamma.from_wikipedia_params(a=2.0, d=3.0, p=1.5)
        s = GeneralizedGamma.from_stacy_params(b=2.0 ** -1.5, d=3.0, p=1.5)
        assert_allclose(tuple(w.canonical_params), tuple(s.canonical_params))
        assert isinstance(w.wikipedia_params, WikipediaParams)
        assert isinstance(w.stacy_params, StacyParams)
        c = GeneralizedGamma.from_canonical_params(*w.canonical_params)
        assert c == w

    def test_string_tag(self):
        dist = GeneralizedGamma.from_params("wikipedia", 1.0, 1.0, 1.0)
        assert_allclose(tuple(dist.params("canonical")), (0.0, 1.0, 1.0), atol=1e-15)

    @pytest.mark.parametrize("parametrization, triple", [
        (Parametrization.CANONICAL, (0.0, 0.0, 1.0)),
        (Parametrization.CANONICAL, (0.0, 1.0, 0.0)),
        (Parametrization.WIKIPEDIA, (1.0, 2.0, -1.0)),
        (Parametrization.WIKIPEDIA, (0.0, 2.0, 1.0)),
        (Parametrization.STACY, (-1.0, 2.0, 1.0)),
    ])
    def test_invalid(self, parametrization, triple):
        with pytest.raises(InvalidParameterError):
            GeneralizedGamma.from_params(parametrization, *triple)

    def test_immutable(self):
        dist = GeneralizedGamma(0.0, 1.0, 1.0)
        with pytest.raises(AttributeError):
            dist.mu = 2.0
        with pytest.raises(AttributeError):
            dist._Q = 2.0
        with pytest.raises(AttributeError):
            del dist._mu
        assert dist.mu == 0.0

    def test_equality_and_hash(self):
        a = GeneralizedGamma(0.1, 0.9, -0.3)
        b = GeneralizedGamma(0.1, 0.9, -0.3)
        assert a == b
        assert hash(a) == hash(b)
        assert a != GeneralizedGamma(0.1, 0.9, 0.3)
        assert "GeneralizedGamma(" in repr(a)


class TestDensity:
    @pytest.mark.parametrize("a, d, p", WIKIPEDIA_CASES)
    def test_zero_for_nonpositive_x(self, a, d, p):
        dist = GeneralizedGamma.from_wikipedia_params(a, d, p)
        assert dist.pdf(0.0) == 0.0
        assert dist.pdf(-1.5) == 0.0
        assert np.all(dist.pdf(np.array([-3.0, -1e-8, 0.0])) == 0.0)
        assert dist.logpdf(0.0) == -np.inf

    @pytest.mark.parametrize("triple", [
        (Parametrization.CANONICAL, (0.0, 1.0, 1.0)),
        (Parametrization.WIKIPEDIA, (2.0, 3.0, 1.5)),
        (Parametrization.WIKIPEDIA, (1.0, 2.0, 0.7)),
        (Parametrization.WIKIPEDIA, (1.0, -3.0, -1.0)),
        (Parametrization.CANONICAL, (0.5, 0.5, -0.5)),
    ])
    def test_integrates_to_one(self, triple):
        parametrization, params = triple
        dist = GeneralizedGamma.from_params(parametrization, *params)
        total, _ = quad(dist.pdf, 0, np.inf, limit=200)
        assert_allclose(total, 1.0, atol=1e-4)

    def test_scalar_and_array_output(self):
        dist = GeneralizedGamma(0.0, 1.0, 1.0)
        assert isinstance(dist.pdf(1.0), float)
        out = dist.pdf(np.linspace(0.1, 3.0, 7))
        assert isinstance(out, np.ndarray)
        assert out.shape == (7,)

    def test_exponential_density(self):
        dist = GeneralizedGamma(0.0, 1.0, 1.0)
        x = np.array([0.1, 0.5, 1.0, 4.0])
        assert_allclose(dist.pdf(x), np.exp(-x))

    def test_logpdf_matches_pdf(self):
        dist = GeneralizedGamma.from_wikipedia_params(2.0, 3.0, 1.5)
        x = np.array([0.2, 1.0, 2.5, 6.0])
        assert_allclose(np.exp(dist.logpdf(x)), dist.pdf(x))

    def test_negative_shapes_density_positive(self):
        dist = GeneralizedGamma.from_wikipedia_params(1.0, -3.0, -1.0)
        x = np.array([0.05, 0.3, 1.0, 10.0])
        assert np.all(dist.pdf(x) > 0)

    def test_score(self):
        dist = GeneralizedGamma(0.0, 1.0, 1.0)
        assert_allclose(dist.score([1.0, 2.0, 3.0]), -2.0)

    @pytest.mark.parametrize("a, d, p", WIKIPEDIA_CASES)
    def test_support(self, a, d, p):
        dist = GeneralizedGamma.from_wikipedia_params(a, d, p)
        assert dist.support() == (0.0, np.inf)


class TestMoments:
    def test_unit_exponential(self):
        dist = GeneralizedGamma.from_params(Parametrization.WIKIPEDIA, 1.0, 1.0, 1.0)
        assert_allclose(tuple(dist.params()), (0.0, 1.0, 1.0), atol=1e-15)
        assert_allclose(dist.mean(), 1.0)
        assert_allclose(dist.var(), 1.0)

    def test_inverse_gamma(self):
        alpha, scale = 3.0, 1.0
        dist = GeneralizedGamma.from_wikipedia_params(scale, -alpha, -1.0)
        assert_allclose(dist.mean(), scale / (alpha - 1), atol=1e-6)
        assert_allclose(dist.var(), scale ** 2 / ((alpha - 1) ** 2 * (alpha - 2)), atol=1e-6)

    @pytest.mark.parametrize("a, d, p", WIKIPEDIA_CASES)
    def test_against_numerical_integration(self, a, d, p):
        dist = GeneralizedGamma.from_wikipedia_params(a, d, p)
        m1, _ = quad(lambda x: x * dist.pdf(x), 0, np.inf, limit=200)
        m2, _ = quad(lambda x: x * x * dist.pdf(x), 0, np.inf, limit=200)
        assert_allclose(dist.mean(), m1, rtol=1e-4)
        assert_allclose(dist.var(), m2 - m1 ** 2, rtol=1e-3)

    @pytest.mark.parametrize("a, d, p", WIKIPEDIA_CASES)
    def test_mean_is_first_moment(self, a, d, p):
        dist = GeneralizedGamma.from_wikipedia_params(a, d, p)
        assert_allclose(dist.mean(), dist.moment(1), rtol=1e-10)
        assert_allclose(dist.var(), dist.moment(2) - dist.moment(1) ** 2, rtol=1e-8)

    def test_std_and_stats(self):
        dist = GeneralizedGamma.from_wikipedia_params(2.0, 3.0, 1.5)
        assert_allclose(dist.std() ** 2, dist.var())
        mean, var = dist.stats()
        assert mean == dist.mean()
        assert var == dist.var()
        assert dist.stats('m') == dist.mean()

    def test_undefined_mean(self):
        # inverse gamma with shape 1/2 has neither mean nor variance
        dist = GeneralizedGamma.from_wikipedia_params(1.0, -0.5, -1.0)
        with pytest.warns(UndefinedMomentWarning):
            assert dist.mean() == np.inf
        with pytest.warns(UndefinedMomentWarning):
            assert dist.var() == np.inf

    def test_undefined_variance_only(self):
        # inverse gamma with shape 1.5: mean exists, variance does not
        dist = GeneralizedGamma.from_wikipedia_params(1.0, -1.5, -1.0)
        with warnings.catch_warnings():
            warnings.simplefilter("error", UndefinedMomentWarning)
            assert_allclose(dist.mean(), 2.0)
        with pytest.warns(UndefinedMomentWarning):
            assert dist.var() == np.inf

    def test_undefined_moment_as_error(self):
        dist = GeneralizedGamma.from_wikipedia_params(1.0, -0.5, -1.0)
        with warnings.catch_warnings():
            warnings.simplefilter("error", UndefinedMomentWarning)
            with pytest.raises(UndefinedMomentWarning):
                dist.mean()

    def test_higher_moment_undefined(self):
        dist = GeneralizedGamma.from_wikipedia_params(1.0, -3.0, -1.0)
        with pytest.warns(UndefinedMomentWarning):
            assert dist.moment(3) == np.inf


class TestMode:
    @pytest.mark.parametrize("a, d, p", [
        (1.0, 1.0, 1.0),
        (2.0, 0.5, 2.0),
        (1.0, 0.9, 0.3),
    ])
    def test_zero_when_d_at_most_one(self, a, d, p):
        dist = GeneralizedGamma.from_wikipedia_params(a, d, p)
        assert dist.mode() == 0.0

    @pytest.mark.parametrize("a, d, p", [
        (2.0, 3.0, 1.5),
        (1.0, 2.0, 0.7),
        (0.5, 4.0, 3.0),
        (1.0, -3.0, -1.0),
    ])
    def test_derivative_vanishes(self, a, d, p):
        dist = GeneralizedGamma.from_wikipedia_params(a, d, p)
        mode = dist.mode()
        assert mode > 0
        h = 1e-6 * mode
        slope = (dist.pdf(mode + h) - dist.pdf(mode - h)) / (2 * h)
        assert abs(slope) < 1e-3
        assert dist.pdf(mode) > dist.pdf(0.9 * mode)
        assert dist.pdf(mode) > dist.pdf(1.1 * mode)

    def test_inverse_gamma_mode(self):
        alpha, scale = 3.0, 2.0
        dist = GeneralizedGamma.from_wikipedia_params(scale, -alpha, -1.0)
        assert_allclose(dist.mode(), scale / (alpha + 1))


class TestSampling:
    def test_convergence(self):
        dist = GeneralizedGamma(mu=0.0, sigma=1.0, Q=1.0)
        samples = dist.rvs(size=100_000, random_state=42)
        assert samples.shape == (100_000,)
        assert np.all(samples > 0)
        assert_allclose(np.mean(samples), dist.mean(), rtol=0.01)
        assert_allclose(np.var(samples), dist.var(), rtol=0.05)

    @pytest.mark.parametrize("a, d, p", [
        (2.0, 3.0, 1.5),
        (1.0, -5.0, -1.0),
    ])
    def test_log_moments(self, a, d, p):
        dist = GeneralizedGamma.from_wikipedia_params(a, d, p)
        samples = dist.rvs(size=50_000, random_state=7)
        # E[log X] = mu + sigma * (digamma(1/Q^2) - log(1/Q^2)) / Q
        k = 1.0 / dist.Q ** 2
        expected = dist.mu + dist.sigma * (digamma(k) - np.log(k)) / dist.Q
        assert_allclose(np.mean(np.log(samples)), expected, atol=0.02)

    def test_reproducible(self):
        dist = GeneralizedGamma(0.2, 0.8, -0.6)
        assert_allclose(dist.rvs(size=10, random_state=3), dist.rvs(size=10, random_state=3))
        rng1 = np.random.default_rng(11)
        rng2 = np.random.default_rng(11)
        assert dist.rand(rng1) == dist.rand(rng2)

    def test_scalar_draw(self):
        dist = GeneralizedGamma(0.0, 1.0, 1.0)
        x = dist.rvs(random_state=0)
        assert isinstance(x, float)
        assert x > 0
        assert isinstance(dist.rand(), float)

    def test_shape(self):
        dist = GeneralizedGamma(0.0, 1.0, -1.0)
        assert dist.rvs(size=(3, 4), random_state=0).shape == (3, 4)

    def test_uses_auxiliary_gamma(self):
        dist = GeneralizedGamma(mu=0.4, sigma=0.7, Q=0.5)
        g = dist.gamma_dist.rvs(size=5, random_state=123)
        expected = np.exp(dist.mu + dist.sigma * np.log(dist.Q ** 2 * g) / dist.Q)
        assert_allclose(dist.rvs(size=5, random_state=123), expected)


class TestUnsupported:
    @pytest.mark.parametrize("method, arg", [
        ("cdf", 1.0),
        ("ppf", 0.5),
        ("sf", 1.0),
        ("isf", 0.5),
        ("logcdf", 1.0),
    ])
    def test_raises(self, method, arg):
        dist = GeneralizedGamma()
        with pytest.raises(NotImplementedError):
            getattr(dist, method)(arg)

    def test_median_and_interval(self):
        dist = GeneralizedGamma()
        with pytest.raises(NotImplementedError):
            dist.median()
        with pytest.raises(NotImplementedError):
            dist.interval(0.9)


class TestGammaProjection:
    def test_to_gamma(self):
        dist = GeneralizedGamma.from_wikipedia_params(2.0, 3.0, 1.0)
        g = dist.to_gamma()
        assert_allclose(g.shape, 3.0)
        assert_allclose(g.rate, 0.5)
        x = np.linspace(0.1, 10, 20)
        assert_allclose(dist.pdf(x), g.pdf(x), rtol=1e-9)
        assert_allclose(dist.mean(), g.mean())

    def test_not_gamma(self):
        dist = GeneralizedGamma.from_wikipedia_params(2.0, 3.0, 1.5)
        with pytest.raises(ValueError):
            dist.to_gamma()


def _log_space_moment(dist, k):
    # E[X^k] with x = exp(y), so the lognormal-like body stays on a finite range
    value, _ = quad(lambda y: np.exp((k + 1) * y) * dist.pdf(np.exp(y)), -15, 15,
                    limit=200)
    return value


class TestSmallQ:
    """Near-lognormal regime, where the Wikipedia scale ``a`` underflows."""

    @pytest.mark.parametrize("Q", [0.05, 0.02, 0.01])
    def test_density_integrates_to_one(self, Q):
        dist = GeneralizedGamma(mu=0.0, sigma=1.0, Q=Q)
        assert np.isfinite(dist.pdf(1.0))
        assert_allclose(dist.pdf(1.0), 1 / np.sqrt(2 * np.pi), rtol=2e-2)
        assert_allclose(_log_space_moment(dist, 0), 1.0, atol=1e-6)

    @pytest.mark.parametrize("Q", [0.05, 0.02, 0.01])
    def test_moments_match_integration(self, Q):
        dist = GeneralizedGamma(mu=0.0, sigma=1.0, Q=Q)
        m1 = _log_space_moment(dist, 1)
        m2 = _log_space_moment(dist, 2)
        assert_allclose(dist.mean(), m1, rtol=1e-5)
        assert_allclose(dist.moment(2), m2, rtol=1e-5)
        assert_allclose(dist.var(), m2 - m1 ** 2, rtol=1e-4)

    @pytest.mark.parametrize("Q", [0.05, 0.02, 0.01])
    def test_mode_is_finite_maximum(self, Q):
        dist = GeneralizedGamma(mu=0.0, sigma=1.0, Q=Q)
        mode = dist.mode()
        assert np.isfinite(mode) and mode > 0
        assert dist.pdf(mode) > dist.pdf(0.99 * mode)
        assert dist.pdf(mode) > dist.pdf(1.01 * mode)

    def test_scale_view_underflows(self):
        dist = GeneralizedGamma(mu=0.0, sigma=1.0, Q=0.01)
        assert dist.wikipedia_params.a == 0.0
        assert np.isfinite(dist.stacy_params.b)


class TestLargeScale:
    def test_density_with_unrepresentable_scale(self):
        dist = GeneralizedGamma(mu=0.0, sigma=1e5, Q=1e3)
        value = dist.pdf(1.0)
        assert np.isfinite(value) and value > 0
        a, d, p = dist.params("wikipedia")
        assert a == np.inf
        assert_allclose((d, p), (1e-8, 1e-2))

    def test_stacy_scale_overflow_is_invalid(self):
        with pytest.raises(InvalidParameterError):
            GeneralizedGamma.from_stacy_params(b=1e-300, d=1.0, p=0.01)
