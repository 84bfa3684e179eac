# tests/io/test_planner_logging.py
import json
import logging

from robopath.domain.errors import NoPathError
from robopath.io.planner_logging import PlannerLogging, _default_json_logger

LOGGER = "robopath.test"


def test_stage_end_is_info_with_rounded_ms(caplog):
    hooks = PlannerLogging(run_id="r-1", logger=logging.getLogger(LOGGER))
    with caplog.at_level(logging.DEBUG, logger=LOGGER):
        hooks.stage_start("grow")
        hooks.stage_end("grow", ms=1.234567, obstacles=3)

    assert len(caplog.records) == 1  # stage_start is silent without debug
    rec = caplog.records[0]
    assert rec.levelno == logging.INFO
    assert rec.getMessage() == "stage_end"
    assert rec.extra == {"run_id": "r-1", "stage": "grow", "ms": 1.235, "obstacles": 3}


def test_debug_logs_stage_start(caplog):
    hooks = PlannerLogging(debug=True, logger=logging.getLogger(LOGGER))
    with caplog.at_level(logging.DEBUG, logger=LOGGER):
        hooks.stage_start("visibility_graph")
    assert [r.getMessage() for r in caplog.records] == ["stage_start"]
    assert caplog.records[0].levelno == logging.DEBUG


def test_errors_name_the_exception(caplog):
    hooks = PlannerLogging(logger=logging.getLogger(LOGGER))
    with caplog.at_level(logging.INFO, logger=LOGGER):
        hooks.error("shortest_path", exc=NoPathError("sealed in"))
    rec = caplog.records[0]
    assert rec.levelno == logging.ERROR
    assert rec.extra["error"] == "NoPathError"
    assert rec.extra["detail"] == "sealed in"


def test_default_logger_writes_json_lines(capsys):
    log = _default_json_logger(name="robopath.jsontest", level="INFO")
    log.propagate = False
    PlannerLogging(run_id="r-2", logger=log).stage_end("grow", ms=0.5, safe=True)
    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert json.loads(line) == {
        "level": "INFO",
        "msg": "stage_end",
        "logger": "robopath.jsontest",
        "run_id": "r-2",
        "stage": "grow",
        "ms": 0.5,
        "safe": True,
    }


def test_debug_lowers_an_info_logger(capsys):
    log = _default_json_logger(name="robopath.debugtest", level="INFO")
    log.propagate = False
    hooks = PlannerLogging(level="INFO", debug=True, logger=log)
    assert log.isEnabledFor(logging.DEBUG)
    hooks.stage_start("grow")
    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert json.loads(line)["msg"] == "stage_start"
