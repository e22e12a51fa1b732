import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from keyrooms.layout import GeneratorConfig, LayerGenerator  # noqa: E402


@pytest.fixture
def make_map():
    """Build a finished map; generous retry budget so structural tests never flake on bad luck."""

    def _make(seed, width=10, height=10, layers=4, retries=1000):
        gen = LayerGenerator(GeneratorConfig(width=width, height=height, layers=layers, retries=retries, seed=seed))
        return gen.run()

    return _make
