# examples/chain_merge.py
from nbody_sim.core.invariants import linear_momentum, total_mass
from nbody_sim.renderer import DebugRenderer
from nbody_sim.scene import Scene
from nbody_sim.store import ParticleStore
import numpy as np

store = ParticleStore(rng=np.random.default_rng(0))

# Three bodies on top of each other: they collapse into the first one.
store.add_body(400.0, 300.0, 1.0, 0.0, 10.0)
store.add_body(400.0, 300.0, 0.0, 2.0, 10.0)
store.add_body(400.0, 300.0, -1.0, -1.0, 10.0)
# A lone body far away keeps orbiting.
store.add_body(100.0, 100.0, 0.0, 0.0, 5.0)

with store.exclusive() as bodies:
    m0, p0 = total_mass(bodies), linear_momentum(bodies)

scene = Scene(store)
renderer = DebugRenderer()
renderer.render(scene)
scene.tick()
renderer.render(scene)

with store.exclusive() as bodies:
    m1, p1 = total_mass(bodies), linear_momentum(bodies)

print("m0", m0, "m1", m1)
print("p0", p0, "p1", p1, "dp", p1 - p0)
