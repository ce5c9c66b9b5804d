import numpy as np
import pytest

from tsp_arena import CITY_POOL, ConfigurationError, make_rng, new_instance


@pytest.mark.parametrize("seed", [0, 1, 2, 42, 1234])
def test_generated_matrix_invariants(seed):
    model, home = new_instance(pool_size=10, min_distance=50, max_distance=100, rng=make_rng(seed))
    m = model.matrix
    assert model.cities == CITY_POOL
    assert home in model.cities
    assert np.array_equal(m, m.T)
    assert np.all(np.diag(m) == 0)
    off = m[~np.eye(10, dtype=bool)]
    assert off.min() >= 50
    assert off.max() <= 100


def test_subset_pool_size():
    model, home = new_instance(pool_size=4, rng=make_rng(3))
    assert model.cities == ("A", "B", "C", "D")
    assert home in model.cities


def test_fixed_range_is_inclusive():
    model, _ = new_instance(pool_size=5, min_distance=7, max_distance=7, rng=make_rng(9))
    off = model.matrix[~np.eye(5, dtype=bool)]
    assert set(off.tolist()) == {7}


def test_same_seed_reproduces_instance():
    a, home_a = new_instance(rng=make_rng(11))
    b, home_b = new_instance(rng=make_rng(11))
    assert home_a == home_b
    assert np.array_equal(a.matrix, b.matrix)


def test_calls_do_not_share_storage():
    rng = make_rng(5)
    a, _ = new_instance(rng=rng)
    b, _ = new_instance(rng=rng)
    assert not np.shares_memory(a.matrix, b.matrix)


def test_home_city_varies_across_draws():
    rng = make_rng(2024)
    homes = {new_instance(rng=rng)[1] for _ in range(60)}
    assert len(homes) > 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"pool_size": 1},
        {"pool_size": 0},
        {"pool_size": len(CITY_POOL) + 1},
        {"min_distance": 101, "max_distance": 100},
        {"min_distance": -5, "max_distance": 10},
    ],
)
def test_bad_parameters_raise(kwargs):
    with pytest.raises(ConfigurationError):
        new_instance(rng=make_rng(0), **kwargs)
