# MIT License (see LICENSE)
import logging

import pytest
from bvh_sim.__main__ import build_parser, config_from_args, main, make_simulation
from bvh_sim.config import SimulationConfig
from bvh_sim.types import Circle


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("bvh_sim")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_headless_run_prints_frame(capsys):
    assert main(["--headless", "3", "--spawn", "5", "--seed", "1", "--log-level", "WARNING"]) == 0
    out = capsys.readouterr().out
    assert "=== Frame tick=3 ===" in out
    assert "[0] Circle r=20.00 @ (100.00, 100.00)" in out
    # start-up circle plus five random shapes
    assert out.count("\n[") == 6


def test_flags_override_base_config():
    args = build_parser().parse_args(["--dt", "0.1", "--width", "640"])
    config = config_from_args(args, SimulationConfig(seed=3))
    assert config.dt == 0.1
    assert config.width == 640
    assert config.seed == 3


def test_invalid_flag_value_exits():
    with pytest.raises(SystemExit):
        main(["--dt", "-1", "--headless", "1"])


def test_negative_seed_exits_with_usage_error(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--seed", "-1", "--headless", "1"])
    assert info.value.code == 2
    assert "seed must be non-negative" in capsys.readouterr().err


def test_spawn_without_headless_exits(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--spawn", "3"])
    assert info.value.code == 2
    assert "--headless" in capsys.readouterr().err


def test_startup_scene():
    sim = make_simulation(SimulationConfig())
    shapes = list(sim.shapes())
    assert len(shapes) == 1
    assert shapes[0].geometry == Circle(20.0)
    assert shapes[0].position.tolist() == [100.0, 100.0]
