# examples/headless_run.py
import logging
import time

from nbody_sim.clock import TickLoop
from nbody_sim.config import SimulationConfig
from nbody_sim.interaction import Button, PointerInput
from nbody_sim.renderer import BufferedRenderer

cfg = SimulationConfig.from_env(seed=1)
logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

scene = cfg.build_scene()
renderer = BufferedRenderer()
pointer = PointerInput(scene.store)

# Physics at 60 Hz on its own thread; "redraw" here at ~20 Hz.
with TickLoop(scene, rate_hz=cfg.tick_rate_hz):
    for frame in range(40):
        if frame == 10:
            # a short drag across the middle of the plane
            pointer.press(380, 300)
            for x in range(390, 440, 10):
                pointer.drag(x, 300)
            pointer.release()
        if frame == 30:
            pointer.press(0, 0, Button.SECONDARY)
        renderer.render(scene)
        time.sleep(0.05)

scene.close()
for f in renderer.frames[::5]:
    print(f"t={f['time']:7.2f}  bodies={len(f['bodies'])}")
print("ticks", scene.ticks, "merges", scene.merges)
