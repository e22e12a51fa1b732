"""Layered key-and-lock room map generation."""

from .cells import (
    CONNECTION_STATES,
    DIRECTIONS,
    LOCKED,
    OPEN,
    SHORTCUT,
    Connection,
    Edge,
    Position,
)  # noqa: F401
from .config import GeneratorConfig, apply_env_overrides  # noqa: F401
from .connectivity import is_solvable, locked_layer, reachable, validate_map  # noqa: F401
from .errors import (
    FinalizeError,
    GenerationError,
    InsufficientKeyHolders,
    NoAvailableSpace,
    RetriesExhausted,
)  # noqa: F401
from .generator import GenerationState, LayerGenerator, generate  # noqa: F401
from .room_map import RoomMap  # noqa: F401
from .rooms import Room  # noqa: F401

__all__ = [
    "CONNECTION_STATES",
    "DIRECTIONS",
    "LOCKED",
    "OPEN",
    "SHORTCUT",
    "Connection",
    "Edge",
    "Position",
    "GeneratorConfig",
    "apply_env_overrides",
    "is_solvable",
    "locked_layer",
    "reachable",
    "validate_map",
    "FinalizeError",
    "GenerationError",
    "InsufficientKeyHolders",
    "NoAvailableSpace",
    "RetriesExhausted",
    "GenerationState",
    "LayerGenerator",
    "generate",
    "RoomMap",
    "Room",
]
