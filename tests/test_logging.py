# MIT License (see LICENSE)
import logging

import pytest
from bvh_sim.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("bvh_sim")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_setup_logging_is_idempotent():
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG)
    assert logger.name == "bvh_sim"
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "sim.log"
    setup_logging(logging.INFO, str(log_file))
    logging.getLogger("bvh_sim.simulation").info("spawned something")
    for handler in logging.getLogger("bvh_sim").handlers:
        handler.flush()
    assert "bvh_sim.simulation - INFO - spawned something" in log_file.read_text(encoding="utf-8")
