import jax
import jax.numpy as jnp
import pytest

jax.config.update("jax_enable_x64", True)

NIW_OBS = [
    [3.578396939725760, 0.725404224946106],
    [2.769437029884880, -0.063054873189656],
    [-1.349886940156520, 0.714742903826096],
    [3.034923466331850, -0.204966058299775],
]


@pytest.fixture
def niw_obs():
    return [jnp.array(x) for x in NIW_OBS]


@pytest.fixture
def niw_prior():
    from conjax import NormalInvWishart
    return NormalInvWishart(jnp.zeros(2), 1.0, 2, jnp.eye(2))


@pytest.fixture
def key():
    return jax.random.PRNGKey(0)
