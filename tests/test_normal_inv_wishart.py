import jax.numpy as jnp
import pytest

from conjax import (
    ConstructionError,
    DataOrSuffStat,
    InvalidParameter,
    MvGaussian,
    MvGaussianSuffStat,
    NormalInvWishart,
)
from conjax.conjugate.normal_inv_wishart import ln_z
from conjax.core.math import multivariate_t_logpdf


def assert_same_params(a: NormalInvWishart, b: NormalInvWishart, rtol: float = 0.0):
    if rtol == 0.0:
        assert jnp.array_equal(a.mu, b.mu)
        assert jnp.array_equal(a.scale, b.scale)
        assert a.k == b.k
        assert a.df == b.df
    else:
        assert jnp.allclose(a.mu, b.mu, rtol=rtol, atol=rtol)
        assert jnp.allclose(a.scale, b.scale, rtol=rtol, atol=rtol)
        assert float(a.k) == pytest.approx(float(b.k), rel=rtol)
        assert float(a.df) == pytest.approx(float(b.df), rel=rtol)


def test_ln_z_identity():
    z = ln_z(1.0, 2, jnp.eye(2))
    assert float(z) == pytest.approx(4.368901313378636, abs=1e-12)


def test_ln_m_identity(niw_prior, niw_obs):
    stat = MvGaussianSuffStat(2)
    stat.observe_many(niw_obs)
    ln_m = niw_prior.ln_m(DataOrSuffStat.suffstat(stat))
    assert float(ln_m) == pytest.approx(-16.3923777220275, abs=1e-12)


def test_ln_m_same_for_data_and_stat(niw_prior, niw_obs):
    stat = MvGaussianSuffStat(2)
    stat.observe_many(niw_obs)
    assert float(niw_prior.ln_m(niw_obs)) == pytest.approx(float(niw_prior.ln_m(stat)), rel=1e-12)


def test_ln_m_with_cache_matches_ln_m(niw_prior, niw_obs):
    cache = niw_prior.ln_m_cache()
    assert float(niw_prior.ln_m_with_cache(cache, niw_obs)) == float(niw_prior.ln_m(niw_obs))


def test_posterior_of_nothing_is_prior(niw_prior):
    assert_same_params(niw_prior.posterior(None), niw_prior)
    assert_same_params(niw_prior.posterior(DataOrSuffStat.none()), niw_prior)
    assert_same_params(niw_prior.posterior([]), niw_prior)
    assert_same_params(niw_prior.posterior(MvGaussianSuffStat(2)), niw_prior)


def test_ln_m_of_nothing_is_zero(niw_prior):
    assert float(niw_prior.ln_m(None)) == 0.0


def test_posterior_params(niw_prior, niw_obs):
    post = niw_prior.posterior(niw_obs)
    xs = jnp.stack(niw_obs)
    n = xs.shape[0]
    x_bar = xs.mean(axis=0)
    scatter = (xs - x_bar).T @ (xs - x_bar)

    assert post.k == 5.0
    assert post.df == 6
    assert jnp.allclose(post.mu, n * x_bar / 5.0)
    expected = jnp.eye(2) + scatter + (n / 5.0) * jnp.outer(x_bar, x_bar)
    assert jnp.allclose(post.scale, expected, rtol=1e-12)


def test_posterior_is_additive(niw_prior, niw_obs):
    a, b = niw_obs[:1], niw_obs[1:]
    sequential = niw_prior.posterior(a).posterior(b)
    batch = niw_prior.posterior(niw_obs)
    assert_same_params(sequential, batch, rtol=1e-10)


def test_ln_pp_with_cache_matches_two_step(niw_prior, niw_obs):
    data, y = niw_obs[:3], niw_obs[3]
    cache = niw_prior.ln_pp_cache(data)

    post = niw_prior.posterior(data)
    stat = MvGaussianSuffStat(2)
    stat.observe(y)
    two_step = post.posterior(stat).ln_z() - post.ln_z() - jnp.log(2 * jnp.pi)

    assert float(niw_prior.ln_pp_with_cache(cache, y)) == pytest.approx(float(two_step), rel=1e-10)
    assert float(niw_prior.ln_pp(y, data)) == pytest.approx(float(two_step), rel=1e-10)


def test_ln_pp_is_student_t(niw_prior, niw_obs):
    data = niw_obs[:3]
    dof, loc, scale = niw_prior.predictive_t_params(data)
    for y in [jnp.array([0.5, -0.3]), niw_obs[3], jnp.array([10.0, 4.0])]:
        expected = multivariate_t_logpdf(y, loc, scale, dof)
        assert float(niw_prior.ln_pp(y, data)) == pytest.approx(float(expected), rel=1e-10)


def test_chain_rule(niw_prior, niw_obs):
    total = sum(float(niw_prior.ln_pp(niw_obs[i], niw_obs[:i])) for i in range(len(niw_obs)))
    assert total == pytest.approx(float(niw_prior.ln_m(niw_obs)), rel=1e-10)


def test_m_and_pp_exponentiate(niw_prior, niw_obs):
    assert float(niw_prior.m(niw_obs)) == pytest.approx(float(jnp.exp(niw_prior.ln_m(niw_obs))))
    y = niw_obs[0]
    assert float(niw_prior.pp(y, niw_obs[1:])) == pytest.approx(float(jnp.exp(niw_prior.ln_pp(y, niw_obs[1:]))))


def test_df_at_dimension_is_accepted(niw_obs):
    prior = NormalInvWishart(jnp.zeros(2), 1.0, 2, jnp.eye(2))
    post = prior.posterior(niw_obs)
    assert bool(jnp.all(jnp.isfinite(post.scale)))
    assert jnp.isfinite(prior.ln_m(niw_obs))


def test_accepts_suffstat_checks_ndims(niw_prior):
    assert niw_prior.accepts_suffstat(MvGaussian.standard(2).empty_suffstat())
    assert not niw_prior.accepts_suffstat(MvGaussianSuffStat(3))
    assert not niw_prior.accepts_suffstat(None)


@pytest.mark.parametrize(
    "mu, k, df, scale",
    [
        (jnp.zeros(2), 1.0, 1, jnp.eye(2)),
        (jnp.zeros(2), 1.0, 1.5, jnp.eye(2)),
        (jnp.zeros(2), 0.0, 2, jnp.eye(2)),
        (jnp.zeros(2), jnp.nan, 2, jnp.eye(2)),
        (jnp.zeros(2), 1.0, 2, jnp.zeros((2, 2))),
        (jnp.zeros(2), 1.0, 2, jnp.array([[1.0, 2.0], [2.0, 1.0]])),
        (jnp.zeros(2), 1.0, 2, jnp.array([[1.0, 0.5], [0.0, 1.0]])),
        (jnp.zeros(2), 1.0, 3, jnp.eye(3)),
        (jnp.array([0.0, jnp.inf]), 1.0, 2, jnp.eye(2)),
    ],
)
def test_invalid_params_rejected(mu, k, df, scale):
    with pytest.raises(ConstructionError):
        NormalInvWishart(mu, k, df, scale)


def test_invalid_param_names_parameter():
    with pytest.raises(InvalidParameter) as err:
        NormalInvWishart(jnp.zeros(3), 1.0, 2, jnp.eye(3))
    assert err.value.name == "df"


def test_draw(niw_prior, key):
    fx = niw_prior.draw(key)
    assert isinstance(fx, MvGaussian)
    assert fx.ndims == 2
    assert jnp.isfinite(niw_prior.ln_f(fx))


def test_sample(niw_prior, key):
    draws = niw_prior.sample(key, 5)
    assert len(draws) == 5
    assert all(isinstance(fx, MvGaussian) for fx in draws)


def test_ln_f_prefers_prior_mean():
    prior = NormalInvWishart(jnp.zeros(2), 1.0, 5, jnp.eye(2))
    near = MvGaussian(jnp.zeros(2), jnp.eye(2) / 3.0)
    far = MvGaussian(jnp.array([4.0, -4.0]), jnp.eye(2) / 3.0)
    assert prior.ln_f(near) > prior.ln_f(far)


def test_mean():
    prior = NormalInvWishart(jnp.ones(2), 2.0, 5, 2.0 * jnp.eye(2))
    mean = prior.mean_()
    assert jnp.allclose(mean["mu"], jnp.ones(2))
    assert jnp.allclose(mean["sigma"], jnp.eye(2))
    assert bool(jnp.all(jnp.isnan(NormalInvWishart(jnp.ones(2), 2.0, 2, jnp.eye(2)).mean_()["sigma"])))
