from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Room:
    """A single occupied grid cell.

    ``layer`` is the generation pass that created the room; ``key`` names the
    layer whose locked connections this room's key opens (at most one key).
    """

    layer: int = 0
    key: Optional[int] = None

    @property
    def has_key(self) -> bool:
        return self.key is not None

    def with_key(self, layer: int) -> "Room":
        return replace(self, key=layer)

    def to_dict(self):
        return {"layer": self.layer, "key": self.key}
