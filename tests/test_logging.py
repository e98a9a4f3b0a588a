import json
import logging

from dungeonforge.logging_utils import current_level, get_logger, json_mode
from dungeonforge.server import _configure_logging


def test_configure_logging_creates_file(tmp_path):
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        # Run twice to ensure handlers are replaced rather than stacked
        _configure_logging(str(tmp_path))
        path = _configure_logging(str(tmp_path))
        assert path == str(tmp_path / "app.log")
        assert (tmp_path / "app.log").exists()
        assert len(root.handlers) == 2
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)


def test_key_value_lines(capsys, monkeypatch):
    monkeypatch.delenv("DUNGEONFORGE_LOG_JSON", raising=False)
    monkeypatch.setenv("DUNGEONFORGE_LOG_LEVEL", "debug")
    get_logger("dungeonforge.test").debug(event="phase done", seed=4, skipped=None)
    out = capsys.readouterr().out
    assert "level=debug" in out
    assert "event=phase_done" in out
    assert "seed=4" in out
    assert "skipped" not in out
    assert "logger=dungeonforge.test" in out


def test_level_threshold(capsys, monkeypatch):
    monkeypatch.setenv("DUNGEONFORGE_LOG_LEVEL", "warn")
    assert current_level() == 30
    log = get_logger("dungeonforge.test")
    log.info(event="hidden")
    log.error(event="shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=shown" in captured.err


def test_json_mode(capsys, monkeypatch):
    monkeypatch.setenv("DUNGEONFORGE_LOG_JSON", "1")
    monkeypatch.setenv("DUNGEONFORGE_LOG_LEVEL", "info")
    assert json_mode()
    get_logger("dungeonforge.test").warn(event="uncovered_wall_cells", count=2)
    rec = json.loads(capsys.readouterr().out)
    assert rec["level"] == "warn"
    assert rec["count"] == 2
    assert rec["logger"] == "dungeonforge.test"


def test_get_logger_is_cached():
    assert get_logger("dungeonforge.x") is get_logger("dungeonforge.x")
