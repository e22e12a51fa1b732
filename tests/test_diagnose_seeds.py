import importlib.util
import json
import os

from keyrooms.layout.config import GeneratorConfig
from keyrooms.layout.debug_checks import analyze, run_for_seed
from keyrooms.layout.generator import generate

SCRIPT = os.path.join(os.path.dirname(__file__), "..", "scripts", "diagnose_seeds.py")


def _load_script():
    spec = importlib.util.spec_from_file_location("diagnose_seeds", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_analyze_counts_issues():
    counts = analyze(generate(5, 5, 1, seed=1))
    assert set(counts) >= {"dangling_edges", "key_count_mismatch", "unreachable_rooms"}
    assert all(v == 0 for v in counts.values())


def test_run_for_seed_reports_failure():
    res = run_for_seed(1, GeneratorConfig(width=1, height=1, layers=3))
    assert res == {"seed": 1, "ok": False, "error": "Failed to generate after 10 retries"}


def test_run_for_seed_does_not_mutate_config():
    cfg = GeneratorConfig(width=5, height=5, layers=1)
    res = run_for_seed(12, cfg)
    assert res["ok"] and res["seed"] == 12
    assert cfg.seed is None


def test_script_main(monkeypatch, capsys):
    monkeypatch.setenv("KEYROOMS_LAYERS", "1")
    mod = _load_script()
    assert mod.main(["10", "11"]) == 0
    results = json.loads(capsys.readouterr().out)["results"]
    assert [r["seed"] for r in results] == [10, 11]
