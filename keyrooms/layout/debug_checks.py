"""Per-seed structural diagnostics shared by the CLI and scripts/diagnose_seeds.py."""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict

from .config import GeneratorConfig
from .connectivity import validate_map
from .errors import GenerationError
from .generator import LayerGenerator


def analyze(room_map) -> Dict[str, int]:
    return {k: len(v) for k, v in validate_map(room_map).items()}


def run_for_seed(seed: int, config: GeneratorConfig | None = None) -> Dict[str, Any]:
    config = replace(config or GeneratorConfig(), seed=seed)
    gen = LayerGenerator(config)
    try:
        room_map = gen.run()
    except GenerationError as exc:
        return {"seed": seed, "ok": False, "error": exc.message}
    issues = analyze(room_map)
    return {
        "seed": seed,
        "ok": all(v == 0 for v in issues.values()),
        "issues": issues,
        "retries_used": gen.metrics.get("retries_used", 0),
    }
