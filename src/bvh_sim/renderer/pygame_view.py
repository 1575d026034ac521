# MIT License (see LICENSE)
"""
Interactive pygame window.

Left-clicking spawns a random shape at the cursor. Every frame the
simulation advances exactly one fixed tick and every shape is drawn as a
1-pixel outline, red while it overlaps another shape.

Requires the optional 'viewer' extra (pygame).
"""
from __future__ import annotations
import logging

import pygame

from ..config import SimulationConfig
from ..simulation import Simulation
from ..types import Circle, Square
from .adapter import RendererAdapter, color_for, square_rect

logger = logging.getLogger(__name__)

BACKGROUND = (0, 0, 0)
OUTLINE_WIDTH = 1


class PygameRenderer(RendererAdapter):
    """Draws shape outlines onto a pygame surface."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    def begin_frame(self, tick: int) -> None:
        self.surface.fill(BACKGROUND)

    def draw_shape(self, entity, position, geometry, colliding) -> None:
        color = color_for(colliding)
        match geometry:
            case Circle(radius=r):
                center = (float(position[0]), float(position[1]))
                pygame.draw.circle(self.surface, color, center, r, OUTLINE_WIDTH)
            case Square(length=s):
                pygame.draw.rect(self.surface, color, pygame.Rect(square_rect(position, s)), OUTLINE_WIDTH)
            case _:
                raise TypeError(f"Unknown shape type: {type(geometry)}")

    def end_frame(self) -> None:
        pygame.display.flip()


def handle_events(sim: Simulation) -> bool:
    """
    Drain the pygame event queue.

    Returns:
        False once the user asked to quit.
    """
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            x, y = event.pos
            sim.spawn_random((float(x), float(y)))
    return True


def run(config: SimulationConfig | None = None, sim: Simulation | None = None) -> Simulation:
    """
    Open a window and run the interactive loop until it is closed.

    Args:
        config: Settings for a new simulation (ignored if sim is given).
        sim: Existing simulation to display.

    Returns:
        The simulation in its final state.
    """
    sim = sim or Simulation(config=config or SimulationConfig())
    cfg = sim.config

    pygame.init()
    try:
        surface = pygame.display.set_mode((cfg.width, cfg.height))
        pygame.display.set_caption("bvh-sim")
        renderer = PygameRenderer(surface)
        clock = pygame.time.Clock()
        logger.info("Viewer started (%dx%d @ %d fps)", cfg.width, cfg.height, cfg.fps)

        while handle_events(sim):
            sim.step()
            renderer.render_simulation(sim)
            clock.tick(cfg.fps)
    finally:
        pygame.quit()

    logger.info("Viewer closed after %d ticks with %d entities", sim.tick, len(sim.store))
    return sim
