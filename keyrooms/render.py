"""Terminal renderer for finished room maps.

Each grid cell becomes a 6-column, 3-line box; rows are separated by three
connector lines. Glyphs:

    ┌─┐   room outline, coloured by the room's layer
    │█│   a held key, coloured by the layer it unlocks
    ─ │   open connection
    ╳     locked connection
    ╌ ╎   shortcut (adjacent rooms without a passage), dimmed grey

Colours are 24-bit ANSI sequences; the palette has one entry per layer, so a
map deeper than the palette cannot be rendered in colour (``PaletteError``).
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from colorama import Style

from .layout.cells import DOWN, LEFT, LOCKED, RIGHT, SHORTCUT, UP, Connection, Edge, Position
from .layout.room_map import RoomMap

CONN_V = "│"
CONN_H = "─"
LOCK = "╳"
HINT_V = "╎"
HINT_H = "╌"

BOX_TOP = "┌─┐"
BOX_SIDE = "│"
BOX_BOT = "└─┘"

KEY = "█"

PALETTE: Tuple[Tuple[int, int, int], ...] = (
    (76, 175, 80),  # #4caf50
    (0, 150, 136),  # #009688
    (33, 150, 243),  # #2196f3
    (63, 81, 181),  # #3f51b5
    (103, 58, 183),  # #673ab7
    (156, 39, 176),  # #9c27b0
    (233, 30, 99),  # #e91e63
    (244, 67, 54),  # #f44336
    (255, 152, 0),  # #ff9800
)

GREY = (64, 64, 64)


class PaletteError(ValueError):
    def __init__(self, layer: int):
        super().__init__(f"layer {layer} outside the {len(PALETTE)}-colour palette")
        self.layer = layer


def max_renderable_layers() -> int:
    """Largest ``layers`` argument whose map (start + layers + terminal) fits the palette."""
    return len(PALETTE) - 2


def color_for_layer(layer: int) -> Tuple[int, int, int]:
    if not 0 <= layer < len(PALETTE):
        raise PaletteError(layer)
    return PALETTE[layer]


class MapRenderer:
    def __init__(self, room_map: RoomMap, color: bool = True):
        self.room_map = room_map
        self.color = color

    def _paint(self, text: str, rgb: Tuple[int, int, int]) -> str:
        if not self.color:
            return text
        r, g, b = rgb
        return f"\x1b[38;2;{r};{g};{b}m{text}{Style.RESET_ALL}"

    def _layer(self, text: str, layer: int) -> str:
        if not self.color:
            return text
        return self._paint(text, color_for_layer(layer))

    def _hint(self, text: str) -> str:
        return self._paint(text, GREY)

    def _conn(self, pos: Position, offset: Position) -> Optional[Connection]:
        return self.room_map.get_connection(Edge(pos, pos + offset))

    def _glyph(self, conn: Optional[Connection], open_glyph: str, hint_glyph: str, lock_glyph: str | None = None) -> str:
        if conn is None:
            return " "
        if conn.state == SHORTCUT:
            return self._hint(hint_glyph)
        if conn.state == LOCKED and lock_glyph is not None:
            return lock_glyph
        return open_glyph

    def _row(self, row: int, func: Callable[[Position], str]) -> str:
        return "".join(func(Position(row, col)) for col in range(self.room_map.width))

    def _vertical(self, row: int, offset: Position, lock: bool = False) -> str:
        def cell(pos: Position) -> str:
            glyph = self._glyph(self._conn(pos, offset), CONN_V, HINT_V, LOCK if lock else None)
            return f"  {glyph}   "

        return self._row(row, cell)

    def _box_side(self, row: int, outline: str) -> str:
        def cell(pos: Position) -> str:
            room = self.room_map.get_room(pos)
            arg = self._layer(outline, room.layer) if room is not None else "   "
            return f" {arg}  "

        return self._row(row, cell)

    def _box_middle(self, row: int) -> str:
        def cell(pos: Position) -> str:
            left = self._glyph(self._conn(pos, LEFT), CONN_H, HINT_H)
            room = self.room_map.get_room(pos)
            if room is not None:
                side = self._layer(BOX_SIDE, room.layer)
                middle = self._layer(KEY, room.key) if room.key is not None else " "
                box = f"{side}{middle}{side}"
            else:
                box = "   "
            right_conn = self._conn(pos, RIGHT)
            right = self._glyph(right_conn, CONN_H, HINT_H)
            lock = self._glyph(right_conn, CONN_H, HINT_H, LOCK)
            return f"{left}{box}{right}{lock}"

        return self._row(row, cell)

    def lines(self) -> List[str]:
        out: List[str] = []
        height = self.room_map.height
        for row in range(height):
            if row > 0:
                out.append(self._vertical(row, UP))
            out.append(self._box_side(row, BOX_TOP))
            out.append(self._box_middle(row))
            out.append(self._box_side(row, BOX_BOT))
            if row < height - 1:
                out.append(self._vertical(row, DOWN))
                out.append(self._vertical(row, DOWN, lock=True))
        return out

    def render(self) -> str:
        return "\n".join(self.lines()) + "\n"


def render(room_map: RoomMap, color: bool = True) -> str:
    return MapRenderer(room_map, color=color).render()


__all__ = [
    "MapRenderer",
    "PALETTE",
    "PaletteError",
    "color_for_layer",
    "max_renderable_layers",
    "render",
]
