"""Keyrooms: layered key-and-lock puzzle maps on a 2D grid."""

__version__ = "0.1.0"

from .layout import (
    LOCKED,
    OPEN,
    SHORTCUT,
    Connection,
    Edge,
    GenerationError,
    GeneratorConfig,
    LayerGenerator,
    Position,
    RetriesExhausted,
    Room,
    RoomMap,
    generate,
    validate_map,
)  # noqa: F401
from .render import PaletteError, render  # noqa: F401

__all__ = [
    "__version__",
    "LOCKED",
    "OPEN",
    "SHORTCUT",
    "Connection",
    "Edge",
    "GenerationError",
    "GeneratorConfig",
    "LayerGenerator",
    "Position",
    "RetriesExhausted",
    "Room",
    "RoomMap",
    "generate",
    "validate_map",
    "PaletteError",
    "render",
]
