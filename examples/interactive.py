# examples/interactive.py
# Click to spawn shapes; overlapping shapes turn red. Needs pygame.
from bvh_sim import SimulationConfig
from bvh_sim.logging_config import setup_logging
from bvh_sim.__main__ import make_simulation
from bvh_sim.renderer.pygame_view import run

setup_logging()
run(sim=make_simulation(SimulationConfig(seed=1)))
