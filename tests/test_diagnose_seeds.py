import dataclasses
import importlib.util
import json
import os

import pytest

from dungeonforge.layout import LayoutConfig, generate

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(scope="module")
def diagnose():
    path = os.path.join(ROOT_DIR, "scripts", "diagnose_seeds.py")
    spec = importlib.util.spec_from_file_location("diagnose_seeds", path)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_healthy_layout_reports_ok(diagnose, scenario_a):
    report = diagnose.analyze(generate(1, scenario_a))
    assert report["ok"] is True
    assert report["seed"] == 1
    assert set(report["issues"]) == {"unreachable_rooms", "uncovered_cells", "rooms_out_of_bounds", "spawn_missing"}


def test_missing_edge_is_flagged(diagnose, scenario_a):
    result = generate(1, scenario_a)
    broken = dataclasses.replace(result, edges=())
    assert diagnose.unreachable_rooms(broken) == [result.rooms[1].index]
    assert diagnose.analyze(broken)["ok"] is False


def test_main_prints_json(diagnose, capsys, monkeypatch):
    monkeypatch.setenv("LAYOUT_DUNGEON_SIZE", "40,30")
    monkeypatch.setenv("LAYOUT_DIVISIONS", "6")
    monkeypatch.setenv("LAYOUT_SIZE_CONSTRAIN", "6")
    assert diagnose.main(["4", "5"]) == 0
    out = capsys.readouterr().out
    payload = json.loads(out[out.index("{\n"):])
    assert [r["seed"] for r in payload["results"]] == [4, 5]


def test_run_for_seed_accepts_config(diagnose):
    report = diagnose.run_for_seed(9, LayoutConfig(dungeon_size=(30, 30), size_constrain=8, divisions=3))
    assert report["ok"] is True
