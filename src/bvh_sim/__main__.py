# MIT License (see LICENSE)
"""
Command-line entry point.

    python -m bvh_sim                      # interactive window (needs pygame)
    python -m bvh_sim --headless 100 --spawn 50 --seed 1
"""
from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace

from .config import SimulationConfig, parse_log_level
from .logging_config import setup_logging
from .simulation import Simulation
from .types import Circle

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bvh-sim",
        description="Click to spawn drifting shapes; overlapping shapes turn red.",
    )
    parser.add_argument("--dt", type=float, help="fixed timestep per tick")
    parser.add_argument("--seed", type=int, help="seed for random spawns")
    parser.add_argument("--width", type=int, help="window width in pixels")
    parser.add_argument("--height", type=int, help="window height in pixels")
    parser.add_argument("--fps", type=int, help="frames (ticks) per second")
    parser.add_argument("--log-level", type=parse_log_level, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-file", help="also write logs to this file")
    parser.add_argument(
        "--headless", type=int, metavar="TICKS",
        help="run TICKS ticks without a window and print the final frame",
    )
    parser.add_argument(
        "--spawn", type=int, default=0, metavar="N",
        help="random shapes to spawn inside the window area (requires --headless)",
    )
    return parser


def config_from_args(args: argparse.Namespace, base: SimulationConfig) -> SimulationConfig:
    """Overlay explicitly given command-line flags on base."""
    changes = {
        name: getattr(args, name)
        for name in ("dt", "seed", "width", "height", "fps", "log_level")
        if getattr(args, name) is not None
    }
    return replace(base, **changes)


def make_simulation(config: SimulationConfig) -> Simulation:
    """New simulation holding the start-up scene: one still circle at (100, 100)."""
    sim = Simulation(config=config)
    sim.spawn((100.0, 100.0), Circle(20.0))
    return sim


def run_headless(sim: Simulation, ticks: int, spawn: int) -> None:
    from .renderer import DebugRenderer

    cfg = sim.config
    for _ in range(spawn):
        x = float(sim.rng.uniform(0, cfg.width))
        y = float(sim.rng.uniform(0, cfg.height))
        sim.spawn_random((x, y))
    sim.run(ticks)
    DebugRenderer().render_simulation(sim)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args, SimulationConfig.from_env())
    except ValueError as exc:
        parser.error(str(exc))
    if args.spawn and args.headless is None:
        parser.error("--spawn only applies with --headless")

    setup_logging(config.log_level, args.log_file)
    sim = make_simulation(config)

    if args.headless is not None:
        run_headless(sim, args.headless, args.spawn)
        return 0

    try:
        from .renderer.pygame_view import run
    except ImportError:
        logger.error("The interactive viewer needs pygame: pip install 'bvh-sim[viewer]'")
        return 1
    run(sim=sim)
    return 0


if __name__ == "__main__":
    sys.exit(main())
