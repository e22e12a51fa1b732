import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class GeneratorConfig:
    width: int = 5
    height: int = 5
    layers: int = 3
    min_amount: int = 4
    max_amount: int = 7
    retries: int = 10
    seed: Optional[int] = None
    enable_metrics: bool = True

    def validate(self) -> "GeneratorConfig":
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"width and height must be positive, got {self.width}x{self.height}")
        if self.layers < 0:
            raise ValueError(f"layers must be >= 0, got {self.layers}")
        if self.min_amount < 1 or self.min_amount > self.max_amount:
            raise ValueError(f"invalid rooms-per-layer range {self.min_amount}..{self.max_amount}")
        if self.retries < 0:
            raise ValueError(f"retries must be >= 0, got {self.retries}")
        return self


_INT_ENV = {
    "KEYROOMS_WIDTH": "width",
    "KEYROOMS_HEIGHT": "height",
    "KEYROOMS_LAYERS": "layers",
    "KEYROOMS_MIN_AMOUNT": "min_amount",
    "KEYROOMS_MAX_AMOUNT": "max_amount",
    "KEYROOMS_RETRIES": "retries",
    "KEYROOMS_SEED": "seed",
}
_BOOL_ENV = {
    "KEYROOMS_ENABLE_METRICS": "enable_metrics",
}


def apply_env_overrides(config: GeneratorConfig, environ=None) -> GeneratorConfig:
    """Overwrite config fields from KEYROOMS_* environment variables."""
    environ = os.environ if environ is None else environ
    for env_key, attr in _INT_ENV.items():
        raw = environ.get(env_key)
        if raw is None or raw.strip() == "":
            continue
        try:
            setattr(config, attr, int(raw))
        except ValueError:
            raise ValueError(f"{env_key} must be an integer, got {raw!r}") from None
    for env_key, attr in _BOOL_ENV.items():
        if env_key in environ:
            val = environ.get(env_key, "").lower()
            setattr(config, attr, val not in {"0", "false", "no", ""})
    return config


__all__ = ["GeneratorConfig", "apply_env_overrides"]
