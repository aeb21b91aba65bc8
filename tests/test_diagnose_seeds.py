import importlib.util
import json
import os

import pytest

SCRIPT = os.path.join(os.path.dirname(__file__), "..", "scripts", "diagnose_seeds.py")


@pytest.fixture(scope="module")
def diagnose():
    spec = importlib.util.spec_from_file_location("diagnose_seeds", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_run_for_seed_reports_clean_layout(diagnose):
    res = diagnose.run_for_seed(42, "Tomb", "Small")
    assert res["seed"] == 42
    assert res["ok"] is True
    assert all(v == 0 for v in res["issues"].values())
    assert res["rooms"] > 0


def test_main_prints_json_and_exits_zero(diagnose, capsys):
    code = diagnose.main(["--size", "Small", "--router", "bfs", "1", "2"])
    out = json.loads(capsys.readouterr().out)
    assert [r["seed"] for r in out["results"]] == [1, 2]
    assert code == 0


def test_main_fails_when_issues_found(diagnose, monkeypatch, capsys):
    monkeypatch.setattr(diagnose, "analyze", lambda d: {"grid_drift": [(0, 0)]})
    assert diagnose.main(["7"]) == 1
    capsys.readouterr()
