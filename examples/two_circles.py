# examples/two_circles.py
from bvh_sim import Simulation, Circle

sim = Simulation()

x = sim.spawn((100.0, 100.0), Circle(20.0), velocity=(0.0, 0.0))
y = sim.spawn((110.0, 100.0), Circle(20.0), velocity=(0.0, 0.0))

sim.step()
print("tick", sim.tick, "colliding:", sim.is_colliding(x), sim.is_colliding(y))
print("pairs:", sim.overlapping_pairs())

sim.move_to(y, (10000.0, 10000.0))
sim.step()
print("tick", sim.tick, "colliding:", sim.is_colliding(x), sim.is_colliding(y))
print("pairs:", sim.overlapping_pairs())
