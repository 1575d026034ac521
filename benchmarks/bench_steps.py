"""
Microbenchmark: time per tick vs number of shapes.
Compares the BVH broadphase with a brute-force all-pairs scan.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from bvh_sim.simulation import Simulation
from bvh_sim.config import SimulationConfig
from bvh_sim.profiler import Profiler
from bvh_sim.collision.broadphase import brute_force_pairs, shape_boxes

def run(n: int, steps: int = 100):
    prof = Profiler()
    sim = Simulation(config=SimulationConfig(seed=12345), profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    # spread shapes over an area that grows with n so density stays similar
    extent = 60.0 * np.sqrt(n)
    for _ in range(n):
        x, y = rng.uniform(0.0, extent, size=2)
        sim.spawn_random((float(x), float(y)))

    # warmup
    for _ in range(5):
        sim.step()
    prof.stats.clear()

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step()
    t1 = time.perf_counter()

    boxes = shape_boxes(sim.store)
    b0 = time.perf_counter()
    brute_force_pairs(boxes)
    b1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, b1 - b0, sim.bvh.height, prof.stats.summary()

if __name__ == "__main__":
    for n in [10, 100, 500, 1000, 2000]:
        per_step, brute, height, summary = run(n)
        print(f"N={n:5d}  tick={1e3*per_step:8.3f} ms  ticks/s={1/per_step:8.1f}  "
              f"height={height:3d}  brute-force pairs={1e3*brute:8.3f} ms")
        for k in ["reset", "integrate", "build", "query"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
