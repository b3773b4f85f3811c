import threading

import numpy as np
import pytest
from nbody_sim.constants import WIDTH, HEIGHT
from nbody_sim.scene import Scene
from nbody_sim.store import ParticleStore
from nbody_sim.types import Body, BodyView, InvalidMass


def test_reset_count_and_bounds():
    """reset(100) always yields exactly 100 bodies inside the plane."""
    store = ParticleStore(rng=np.random.default_rng(3))
    for _ in range(5):
        store.reset(100)
        assert store.size() == 100
        for v in store.snapshot():
            assert 0.0 <= v.x <= WIDTH
            assert 0.0 <= v.y <= HEIGHT


def test_generated_ranges():
    store = ParticleStore.seeded(200, rng=np.random.default_rng(11))
    with store.exclusive() as bodies:
        for b in bodies:
            assert 5.0 <= b.mass < 15.0
            assert -1.0 <= b.velocity[0] < 1.0
            assert -1.0 <= b.velocity[1] < 1.0
            assert all(55 <= c < 255 for c in b.color)
            assert b.radius == np.cbrt(b.mass) * 2


def test_seeded_layout_is_reproducible():
    a = ParticleStore.seeded(50, rng=np.random.default_rng(42)).snapshot()
    b = ParticleStore.seeded(50, rng=np.random.default_rng(42)).snapshot()
    assert a == b


def test_add_body_appends_in_order():
    store = ParticleStore(rng=np.random.default_rng(0))
    ids = [store.add_body(10.0 * k, 5.0, 0.0, 0.0, 1.0 + k) for k in range(3)]
    assert len(set(ids)) == 3
    views = store.snapshot()
    assert [v.id for v in views] == ids
    assert [v.x for v in views] == [0.0, 10.0, 20.0]


@pytest.mark.parametrize("mass", [0.0, -1.0, -1e-12, float("nan"), float("inf"), float("-inf")])
def test_add_body_rejects_invalid_mass(mass):
    store = ParticleStore.seeded(3, rng=np.random.default_rng(1))
    before = store.snapshot()
    with pytest.raises(InvalidMass):
        store.add_body(1.0, 1.0, 0.0, 0.0, mass)
    assert store.size() == 3
    assert store.snapshot() == before


def test_invalid_mass_is_a_value_error():
    with pytest.raises(ValueError):
        Body(mass=0.0)
    with pytest.raises(InvalidMass):
        Body(mass=float("inf"))


@pytest.mark.parametrize(
    "x, y, vx, vy",
    [
        (float("nan"), 300.0, 0.0, 0.0),
        (400.0, float("inf"), 0.0, 0.0),
        (400.0, 300.0, float("-inf"), 0.0),
        (400.0, 300.0, 0.0, float("nan")),
    ],
)
def test_add_body_rejects_non_finite_state(x, y, vx, vy):
    store = ParticleStore.seeded(5, rng=np.random.default_rng(1))
    before = store.snapshot()
    with pytest.raises(ValueError):
        store.add_body(x, y, vx, vy, 10.0)
    with pytest.raises(ValueError):
        store.spawn(x, y, vx, vy)
    assert store.snapshot() == before


def test_rejected_body_leaves_field_finite():
    """A refused request must not poison the next tick."""
    store = ParticleStore.seeded(5, rng=np.random.default_rng(1))
    for args in [(400.0, 300.0, 0.0, 0.0, float("inf")), (float("nan"), 300.0, 0.0, 0.0, 10.0)]:
        with pytest.raises(ValueError):
            store.add_body(*args)
    scene = Scene(store)
    scene.tick()
    with store.exclusive() as bodies:
        assert all(np.isfinite(b.position).all() and np.isfinite(b.velocity).all() for b in bodies)
        assert all(np.isfinite(b.mass) for b in bodies)


def test_ids_are_not_reused_after_reset():
    store = ParticleStore.seeded(10, rng=np.random.default_rng(5))
    first = {v.id for v in store.snapshot()}
    store.reset(10)
    second = {v.id for v in store.snapshot()}
    assert first.isdisjoint(second)


def test_spawn_uses_user_mass_range():
    store = ParticleStore(rng=np.random.default_rng(9))
    for _ in range(50):
        store.spawn(100.0, 100.0, 1.0, -1.0)
    with store.exclusive() as bodies:
        assert all(10.0 <= b.mass < 20.0 for b in bodies)
        assert all(np.array_equal(b.velocity, [1.0, -1.0]) for b in bodies)


def test_snapshot_is_point_in_time():
    store = ParticleStore(rng=np.random.default_rng(2))
    store.add_body(1.0, 2.0, 0.0, 0.0, 8.0, color=(10, 20, 30))
    views = store.snapshot()
    radius = float(np.cbrt(8.0) * 2)
    assert views == (BodyView(id=views[0].id, x=1.0, y=2.0, radius=radius, color=(10, 20, 30)),)

    with store.exclusive() as bodies:
        bodies[0].position[:] = (50.0, 60.0)
    assert views[0].x == 1.0
    with pytest.raises(AttributeError):
        views[0].x = 3.0


@pytest.mark.parametrize(
    "call, expected_size",
    [
        (lambda s: s.snapshot(), 5),
        (lambda s: s.add_body(10.0, 10.0, 0.0, 0.0, 5.0), 6),
        (lambda s: s.spawn(10.0, 10.0, 0.0, 0.0), 6),
        (lambda s: s.reset(3), 3),
    ],
    ids=["snapshot", "add_body", "spawn", "reset"],
)
def test_operations_wait_for_exclusive_section(call, expected_size):
    """Every store operation blocks while another caller holds the store."""
    store = ParticleStore.seeded(5, rng=np.random.default_rng(4))
    done = threading.Event()

    def worker():
        call(store)
        done.set()

    with store.exclusive() as bodies:
        caller = threading.Thread(target=worker)
        caller.start()
        assert not done.wait(timeout=0.2)
        assert len(bodies) == 5
    caller.join(timeout=5.0)
    assert done.is_set()
    assert store.size() == expected_size
