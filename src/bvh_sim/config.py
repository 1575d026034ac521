# MIT License (see LICENSE)
"""
Simulation configuration.

Defaults reproduce the classic demo: a fixed 0.05 timestep, a 16-unit
velocity spread, circles of radius 10-30 and squares of side 20-60 in an
800x600 window.

Values can be overridden from environment variables:
    BVH_SIM_DT=0.02          # fixed timestep
    BVH_SIM_SEED=42          # seed for random spawns
    BVH_SIM_SPEED=32         # velocity spread
    BVH_SIM_LOG_LEVEL=DEBUG  # logging level name
"""
from __future__ import annotations
import logging
import math
import os
from dataclasses import dataclass, field, replace
from typing import Mapping

from .spawner import SpawnConfig

ENV_PREFIX = "BVH_SIM_"


@dataclass(frozen=True)
class SimulationConfig:
    """
    Tunable parameters of a simulation run.

    Attributes:
        dt: Fixed timestep applied every tick (never a measured frame time).
        spawn: Distribution of shapes created by spawn_random().
        seed: Seed for the spawn generator; None draws fresh entropy.
        check_invariants: Verify positions are finite after integration.
        width, height: Viewer window size in pixels.
        fps: Target frame rate of the viewer (one tick per frame).
        log_level: Level passed to setup_logging() by the entry point.
    """
    dt: float = 0.05
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    seed: int | None = None
    check_invariants: bool = True
    width: int = 800
    height: int = 600
    fps: int = 60
    log_level: int = logging.INFO

    def __post_init__(self) -> None:
        if not math.isfinite(self.dt) or self.dt <= 0:
            raise ValueError(f"dt must be a positive finite number, got {self.dt!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"window size must be positive, got {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps!r}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SimulationConfig:
        """
        Build a config from BVH_SIM_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set to an unparsable value.
        """
        env = os.environ if environ is None else environ
        config = cls()
        changes: dict = {}

        raw = env.get(ENV_PREFIX + "DT")
        if raw is not None:
            changes["dt"] = _parse(raw, float, "DT")
        raw = env.get(ENV_PREFIX + "SEED")
        if raw is not None:
            changes["seed"] = _parse(raw, int, "SEED")
        raw = env.get(ENV_PREFIX + "SPEED")
        if raw is not None:
            changes["spawn"] = replace(config.spawn, speed=_parse(raw, float, "SPEED"))
        raw = env.get(ENV_PREFIX + "LOG_LEVEL")
        if raw is not None:
            changes["log_level"] = parse_log_level(raw)

        return replace(config, **changes) if changes else config


def _parse(raw: str, kind: type, name: str):
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name}={raw!r} is not a valid {kind.__name__}") from None


def parse_log_level(name: str) -> int:
    """Translate a level name such as 'debug' or 'INFO' to its logging constant."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level
