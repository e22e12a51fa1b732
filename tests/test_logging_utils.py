import json

import pytest

from keyrooms import logging_utils


@pytest.fixture(autouse=True)
def _restore_level():
    saved = (logging_utils.CURRENT_LEVEL, logging_utils.JSON_MODE)
    yield
    logging_utils.CURRENT_LEVEL, logging_utils.JSON_MODE = saved


def test_key_value_lines_go_to_stderr(capsys):
    logging_utils.JSON_MODE = False
    logging_utils.set_level("info")
    logging_utils.get_logger("keyrooms.test").info(event="made map", rooms=12, skipped=None)
    captured = capsys.readouterr()
    assert captured.out == ""
    line = captured.err.strip()
    assert line.startswith("level=info ts=")
    assert "event=made_map" in line
    assert "rooms=12" in line
    assert "logger=keyrooms.test" in line
    assert "skipped" not in line


def test_level_threshold(capsys):
    logging_utils.set_level("warn")
    log = logging_utils.get_logger("keyrooms.test")
    log.info(event="quiet")
    log.debug(event="quieter")
    assert capsys.readouterr().err == ""
    log.error(event="loud")
    assert "event=loud" in capsys.readouterr().err


def test_json_mode(capsys):
    logging_utils.JSON_MODE = True
    logging_utils.set_level("debug")
    logging_utils.get_logger("keyrooms.test").debug(event="layer_advanced", layer=2)
    rec = json.loads(capsys.readouterr().err)
    assert rec["level"] == "debug"
    assert rec["event"] == "layer_advanced"
    assert rec["layer"] == 2
    assert rec["logger"] == "keyrooms.test"


def test_loggers_are_cached():
    assert logging_utils.get_logger("a") is logging_utils.get_logger("a")


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        logging_utils.set_level("chatty")
