import numpy as np
from nbody_sim.interaction import Button, PointerInput
from nbody_sim.store import ParticleStore


def test_drag_spawns_with_scaled_velocity():
    store = ParticleStore(rng=np.random.default_rng(6))
    pointer = PointerInput(store)

    pointer.press(100.0, 100.0)
    pointer.drag(110.0, 96.0)
    pointer.drag(111.0, 96.0)
    pointer.release()

    with store.exclusive() as bodies:
        assert len(bodies) == 2
        assert tuple(bodies[0].position) == (110.0, 96.0)
        assert tuple(bodies[0].velocity) == (5.0, -2.0)
        assert tuple(bodies[1].velocity) == (0.5, 0.0)
        assert all(10.0 <= b.mass < 20.0 for b in bodies)
    assert not pointer.dragging


def test_drag_without_press_starts_at_rest():
    store = ParticleStore(rng=np.random.default_rng(6))
    pointer = PointerInput(store)
    pointer.drag(50.0, 60.0)
    with store.exclusive() as bodies:
        assert tuple(bodies[0].velocity) == (0.0, 0.0)


def test_secondary_press_resets():
    store = ParticleStore.seeded(3, rng=np.random.default_rng(6))
    pointer = PointerInput(store, reset_count=25)
    pointer.press(0.0, 0.0, Button.SECONDARY)
    assert store.size() == 25
    assert not pointer.dragging
