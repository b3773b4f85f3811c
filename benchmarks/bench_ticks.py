"""
Microbenchmark: time per tick vs number of bodies.

The force pass is O(N²), so doubling N should roughly quadruple the
"forces" time. Run:
  python benchmarks/bench_ticks.py
  NBODY_SIM_WORKERS=4 python benchmarks/bench_ticks.py
"""
import time
import numpy as np
from nbody_sim.config import SimulationConfig
from nbody_sim.profiler import Profiler
from nbody_sim.scene import Scene
from nbody_sim.store import ParticleStore


def run(n: int, ticks: int = 50):
    cfg = SimulationConfig.from_env()
    prof = Profiler()
    store = ParticleStore.seeded(n, cfg.width, cfg.height, np.random.default_rng(12345))
    scene = Scene(store, workers=cfg.workers, use_numba=cfg.use_numba, profiler=prof)

    # warmup (also compiles the numba kernel if enabled)
    for _ in range(3):
        scene.tick()
    prof.stats.clear()

    t0 = time.perf_counter()
    for _ in range(ticks):
        scene.tick()
    t1 = time.perf_counter()
    scene.close()

    per_tick = (t1 - t0) / ticks
    return per_tick, store.size(), prof.stats.summary()


if __name__ == "__main__":
    for n in [50, 100, 200, 400]:
        per_tick, alive, summary = run(n)
        print(f"N={n:4d}  alive={alive:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}")
        for k in ["forces", "integrate", "merge"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
