import math

import numpy as np
import pytest
from nbody_sim.core.forces import ForceField, gravitational_accelerations, snapshot_arrays
from nbody_sim.core.parallel import ParallelFor, partition
from nbody_sim.store import ParticleStore
from nbody_sim.types import Body


def _reference(positions, masses, g=1.0, eps=5.0):
    """Direct evaluation of the force law, written out term by term."""
    n = len(masses)
    out = np.zeros((n, 2))
    for i in range(n):
        ax = ay = 0.0
        for j in range(n):
            if i == j:
                continue
            dx = float(positions[j][0]) - float(positions[i][0])
            dy = float(positions[j][1]) - float(positions[i][1])
            dist_sq = dx * dx + dy * dy + eps
            dist = math.sqrt(dist_sq)
            force = g * float(masses[i]) * float(masses[j]) / dist_sq
            ax += force * dx / (dist * float(masses[i]))
            ay += force * dy / (dist * float(masses[i]))
        out[i] = (ax, ay)
    return out


def _random_field(n, seed):
    store = ParticleStore.seeded(n, rng=np.random.default_rng(seed))
    with store.exclusive() as bodies:
        return snapshot_arrays(bodies)


def test_two_body_values():
    """Equal masses 3 units apart: a = G·m·dx / (d·d²) with d² = 9 + 5."""
    pos = np.array([[0.0, 0.0], [3.0, 0.0]])
    m = np.array([2.0, 2.0])
    acc = gravitational_accelerations(pos, m)

    d2 = 9.0 + 5.0
    expected = 1.0 * 2.0 * 2.0 / d2 * 3.0 / (math.sqrt(d2) * 2.0)
    assert acc[0, 0] == expected
    assert acc[1, 0] == -expected
    assert acc[0, 1] == 0.0 and acc[1, 1] == 0.0


def test_matches_formula_bit_for_bit():
    pos, m = _random_field(40, seed=8)
    assert np.array_equal(gravitational_accelerations(pos, m), _reference(pos, m))


def test_acceleration_independent_of_own_mass():
    pos = np.array([[0.0, 0.0], [10.0, 4.0]])
    light = gravitational_accelerations(pos, np.array([1.0, 7.0]))
    heavy = gravitational_accelerations(pos, np.array([100.0, 7.0]))
    np.testing.assert_allclose(light[0], heavy[0], rtol=1e-12)


def test_coincident_bodies_are_finite():
    """Softening keeps the force finite at zero separation."""
    pos = np.array([[5.0, 5.0], [5.0, 5.0], [5.0, 5.0]])
    acc = gravitational_accelerations(pos, np.array([10.0, 10.0, 10.0]))
    assert np.all(np.isfinite(acc))
    assert np.all(acc == 0.0)


def test_empty_and_single():
    empty = gravitational_accelerations(np.zeros((0, 2)), np.zeros(0))
    assert empty.shape == (0, 2)
    single = gravitational_accelerations(np.array([[1.0, 2.0]]), np.array([3.0]))
    assert np.array_equal(single, np.zeros((1, 2)))


def test_net_force_is_zero():
    """Σ m_i a_i = 0: gravity is pairwise antisymmetric."""
    pos, m = _random_field(60, seed=21)
    acc = gravitational_accelerations(pos, m)
    net = (m[:, None] * acc).sum(axis=0)
    scale = np.abs(m[:, None] * acc).sum()
    assert np.all(np.abs(net) <= 1e-12 * scale)


@pytest.mark.parametrize("workers", [2, 3, 8])
def test_worker_count_does_not_change_result(workers):
    pos, m = _random_field(37, seed=workers)
    serial = gravitational_accelerations(pos, m)
    with ParallelFor(workers) as pfor:
        parallel = gravitational_accelerations(pos, m, pfor=pfor)
    assert np.array_equal(serial, parallel)


def test_partition_covers_range():
    chunks = partition(10, 3)
    assert [(c.start, c.stop) for c in chunks] == [(0, 4), (4, 7), (7, 10)]
    assert partition(2, 8) == [range(0, 1), range(1, 2)]
    assert partition(0, 4) == []


def test_parallel_for_propagates_errors():
    def boom(start, stop):
        if start > 0:
            raise RuntimeError("chunk failed")

    with ParallelFor(4) as pfor:
        with pytest.raises(RuntimeError, match="chunk failed"):
            pfor(8, boom)


def test_snapshot_arrays_are_read_only():
    pos, m = snapshot_arrays([Body(mass=1.0, position=(1, 2)), Body(mass=2.0, position=(3, 4))])
    assert pos.shape == (2, 2)
    with pytest.raises(ValueError):
        pos[0, 0] = 9.0
    with pytest.raises(ValueError):
        m[0] = 9.0


def test_apply_writes_each_body():
    a = Body(mass=4.0, position=(0.0, 0.0))
    b = Body(mass=4.0, position=(0.0, 6.0))
    field = ForceField(numba=False)
    field.apply([a, b])
    assert a.acceleration[1] > 0.0
    assert b.acceleration[1] == -a.acceleration[1]
    assert a.acceleration[0] == 0.0


def test_numba_kernel_matches_python():
    pytest.importorskip("numba")
    pos, m = _random_field(30, seed=13)
    field = ForceField(numba=True)
    np.testing.assert_allclose(field.accelerations(pos, m), _reference(pos, m), rtol=1e-12, atol=0)
