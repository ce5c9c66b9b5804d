from concurrent.futures import ThreadPoolExecutor

import pytest

from tsp_arena import ConfigurationError, SessionNotFoundError, SessionStore, make_rng, new_instance


def make_store(max_sessions=None):
    return SessionStore(max_sessions=max_sessions)


def test_create_then_get_is_idempotent():
    store = make_store()
    model, home = new_instance(rng=make_rng(1))
    sid = store.create(model, home, model.cities, player_name="ada")
    first = store.get(sid)
    second = store.get(sid)
    assert first is second
    assert first.model is model
    assert first.home == home
    assert first.cities == model.cities
    assert first.player_name == "ada"
    assert sid in store
    assert len(store) == 1


def test_unknown_id_raises_not_found():
    store = make_store()
    with pytest.raises(SessionNotFoundError):
        store.get(12345)


def test_ids_are_increasing_and_unique():
    store = make_store()
    model, home = new_instance(rng=make_rng(2))
    ids = [store.create(model, home, model.cities) for _ in range(5)]
    assert ids == [1, 2, 3, 4, 5]


def test_oldest_sessions_evicted_beyond_capacity():
    store = make_store(max_sessions=2)
    model, home = new_instance(rng=make_rng(3))
    a = store.create(model, home, model.cities)
    b = store.create(model, home, model.cities)
    c = store.create(model, home, model.cities)
    assert len(store) == 2
    with pytest.raises(SessionNotFoundError):
        store.get(a)
    assert store.get(b).session_id == b
    assert store.get(c).session_id == c
    # evicted ids are never handed out again
    assert store.create(model, home, model.cities) == 4


def test_concurrent_creates_are_all_visible():
    store = make_store()
    model, home = new_instance(rng=make_rng(4))

    def create_and_read(_):
        sid = store.create(model, home, model.cities)
        return sid, store.get(sid).session_id

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(create_and_read, range(200)))
    ids = [sid for sid, _ in results]
    assert all(sid == seen for sid, seen in results)
    assert sorted(ids) == list(range(1, 201))
    assert len(store) == 200


def test_home_must_belong_to_model():
    store = make_store()
    model, _ = new_instance(pool_size=3, rng=make_rng(5))
    with pytest.raises(ConfigurationError):
        store.create(model, "J", model.cities)


def test_invalid_capacity():
    with pytest.raises(ConfigurationError):
        make_store(max_sessions=0)
