# examples/random_spawns.py
import numpy as np
from bvh_sim import Simulation, SimulationConfig
from bvh_sim.renderer import BufferedRenderer

sim = Simulation(config=SimulationConfig(seed=7))
rng = np.random.default_rng(7)

# simulate 40 clicks inside an 800x600 window
for _ in range(40):
    x, y = rng.uniform((0, 0), (800, 600))
    sim.spawn_random((float(x), float(y)))

renderer = BufferedRenderer()
for _ in range(200):
    sim.step()
    renderer.render_simulation(sim)

for frame in renderer.frames[::50]:
    red = sum(1 for s in frame["shapes"] if s["colliding"])
    print(f"tick {frame['tick']:4d}: {red:2d}/{len(frame['shapes'])} shapes overlapping")

print("tree height:", sim.bvh.height, "pairs:", len(sim.overlapping_pairs()))
