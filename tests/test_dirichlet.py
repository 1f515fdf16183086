import math

import jax.numpy as jnp
import pytest

from conjax import Categorical, CategoricalSuffStat, ConstructionError, Dirichlet, SymmetricDirichlet

XS = [0, 1, 1]


def test_posterior():
    post = Dirichlet(jnp.array([1.0, 2.0, 3.0])).posterior(XS)
    assert jnp.array_equal(post.alphas, jnp.array([2.0, 4.0, 3.0]))


def test_posterior_of_nothing_is_prior():
    prior = SymmetricDirichlet(0.5, 4)
    assert jnp.array_equal(prior.posterior(None).alphas, prior.alphas)


def test_ln_m():
    # 1/3 * 1/4 * 2/5
    assert float(SymmetricDirichlet.uniform(3).ln_m(XS)) == pytest.approx(math.log(1.0 / 30.0), rel=1e-12)


def test_symmetric_cache_matches_general():
    sym = SymmetricDirichlet(0.7, 5)
    gen = Dirichlet(jnp.full(5, 0.7))
    for a, b in zip(sym.ln_m_cache(), gen.ln_m_cache()):
        assert float(a) == pytest.approx(float(b), rel=1e-12)
    assert float(sym.ln_m(XS)) == pytest.approx(float(gen.ln_m(XS)), rel=1e-12)


def test_ln_m_with_cache():
    prior = Dirichlet(jnp.array([0.3, 1.0, 2.5]))
    cache = prior.ln_m_cache()
    assert float(prior.ln_m_with_cache(cache, XS)) == float(prior.ln_m(XS))


def test_pp_argmax():
    prior = SymmetricDirichlet.jeffreys(4)
    stat = CategoricalSuffStat(4)
    stat.observe_many([2, 2, 2, 0, 1, 3, 2])
    cache = prior.ln_pp_cache(stat)
    scores = [float(prior.ln_pp_with_cache(cache, y)) for y in range(4)]
    assert max(range(4), key=lambda y: scores[y]) == 2
    assert sum(math.exp(s) for s in scores) == pytest.approx(1.0)


def test_accepts_suffstat_checks_k():
    prior = Dirichlet(jnp.ones(3))
    assert prior.accepts_suffstat(CategoricalSuffStat(3))
    assert not prior.accepts_suffstat(CategoricalSuffStat(4))
    assert SymmetricDirichlet.jeffreys(4).accepts_suffstat(Categorical.uniform(4).empty_suffstat())


def test_chain_rule():
    prior = Dirichlet(jnp.array([0.3, 1.0, 2.5]))
    xs = [2, 0, 2, 1, 2]
    total = sum(float(prior.ln_pp(xs[i], xs[:i])) for i in range(len(xs)))
    assert total == pytest.approx(float(prior.ln_m(xs)), rel=1e-12)


@pytest.mark.parametrize("alphas", [[1.0, 0.0], [1.0, -2.0], [], [1.0, jnp.nan]])
def test_invalid_params_rejected(alphas):
    with pytest.raises(ConstructionError):
        Dirichlet(jnp.array(alphas))


def test_invalid_symmetric_rejected():
    with pytest.raises(ConstructionError):
        SymmetricDirichlet(1.0, 0)
    with pytest.raises(ConstructionError):
        SymmetricDirichlet(-1.0, 3)


def test_draw(key):
    prior = SymmetricDirichlet.uniform(3)
    fx = prior.draw(key)
    assert isinstance(fx, Categorical)
    assert fx.k == 3
    assert jnp.isfinite(prior.ln_f(fx))
