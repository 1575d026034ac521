# MIT License (see LICENSE)
import logging

import pytest
from bvh_sim.profiler import Profiler
from bvh_sim.simulation import Simulation
from bvh_sim.config import SimulationConfig


def test_simulation_stages_are_timed():
    prof = Profiler()
    sim = Simulation(config=SimulationConfig(seed=0), profiler=prof)
    for i in range(10):
        sim.spawn_random((i * 20.0, 0.0))
    sim.run(4)

    summary = prof.stats.summary()
    assert set(summary) == {"reset", "integrate", "build", "query"}
    for stats in summary.values():
        assert stats["n"] == 4
        assert stats["max_ms"] >= stats["mean_ms"] >= 0.0


def test_section_records_on_error():
    prof = Profiler()
    with pytest.raises(RuntimeError):
        with prof.section("boom"):
            raise RuntimeError("fail")
    assert prof.stats.summary()["boom"]["n"] == 1


def test_log_summary(caplog):
    prof = Profiler()
    with prof.section("build"):
        pass
    with caplog.at_level(logging.INFO, logger="bvh_sim.profiler"):
        prof.log_summary()
    assert "build" in caplog.text


def test_total_and_clear():
    prof = Profiler()
    prof.stats.add("query", 0.002)
    prof.stats.add("query", 0.004)
    stats = prof.stats.summary()["query"]
    assert stats["total_ms"] == pytest.approx(6.0)
    assert stats["mean_ms"] == pytest.approx(3.0)
    prof.stats.clear()
    assert prof.stats.summary() == {}
