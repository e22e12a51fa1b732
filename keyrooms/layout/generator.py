"""Layered key-and-lock room generator.

Generation phases:
    * Place a single layer-0 start room at a random cell (root snapshot).
    * Advance layer by layer: grow 4-7 rooms out of the previous layer's
      frontier, wire inter-layer / intra-layer / shortcut connections, then
      hide one key per locked doorway in rooms placed before the new layer.
    * On a failed advance, discard the child snapshot, back up to the parent
      of the current one and retry, consuming one retry from the budget.
    * Finalize once: attach a terminal room with one locked connection and
      put its key somewhere in the last generated layer.

Snapshots are never mutated once a child has been derived from them; every
advance works on a clone of the parent's room map and placement list.

Public contract:
    generate(width, height, layers, *, seed=None, rng=None) -> RoomMap
    generate(config=GeneratorConfig(...)) -> RoomMap
    LayerGenerator(GeneratorConfig(...), rng=None).run() -> RoomMap
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .cells import DIRECTIONS, LOCKED, OPEN, SHORTCUT, Connection, Edge, Position
from .config import GeneratorConfig
from .errors import FinalizeError, GenerationError, InsufficientKeyHolders, NoAvailableSpace, RetriesExhausted
from .metrics import init_metrics
from .room_map import RoomMap
from .rooms import Room

log = get_logger("keyrooms.generator")


@dataclass
class GenerationState:
    room_map: RoomMap
    positions: List[Position]
    amount: int
    layer: int
    parent: Optional["GenerationState"] = field(default=None, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def layer_start(self) -> int:
        """Index into ``positions`` where this snapshot's own layer begins."""
        return len(self.positions) - self.amount

    def layer_positions(self) -> List[Position]:
        return self.positions[self.layer_start():]

    def derive(self) -> "GenerationState":
        return GenerationState(
            room_map=self.room_map.clone(),
            positions=list(self.positions),
            amount=self.amount,
            layer=self.layer,
            parent=self,
        )


class LayerGenerator:
    def __init__(self, config: GeneratorConfig | None = None, rng: random.Random | None = None):
        # private copy; a drawn seed must not leak into the caller's config
        self.config = replace(config or GeneratorConfig()).validate()
        if rng is None:
            if self.config.seed is None:
                self.config.seed = random.randint(0, 2**31 - 1)
            rng = random.Random(self.config.seed)
        self.seed = self.config.seed
        self._rng = rng
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}

    def _count(self, key: str, amount: int = 1) -> None:
        if self.config.enable_metrics:
            self.metrics[key] += amount

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------
    def run(self) -> RoomMap:
        start = time.perf_counter()
        retries_left = self.config.retries
        state = self.initial_state()
        while state.layer < self.config.layers:
            self._count('attempts')
            try:
                state = self.next_state(state)
            except (NoAvailableSpace, InsufficientKeyHolders) as exc:
                retries_left -= 1
                self._count('failed_advances')
                self._count('no_space_failures' if isinstance(exc, NoAvailableSpace) else 'key_holder_failures')
                log.debug(event="layer_failed", layer=state.layer + 1, reason=exc.code, retries_left=retries_left)
                if retries_left < 0:
                    log.error(event="generation_failed", seed=self.seed, retries=self.config.retries)
                    raise RetriesExhausted(self.config.retries) from exc
                if state.parent is not None:
                    state = state.parent
                    self._count('backtracks')
                    log.debug(event="backtrack", layer=state.layer)
                continue
            log.debug(event="layer_advanced", layer=state.layer, rooms=state.amount)
        state = self.final_state(state)
        room_map = state.room_map
        if self.config.enable_metrics:
            self._collect_counts(room_map, retries_left)
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        log.info(
            event="generation_complete",
            seed=self.seed,
            width=self.config.width,
            height=self.config.height,
            layers=self.config.layers,
            rooms=len(state.positions),
        )
        return room_map

    def _collect_counts(self, room_map: RoomMap, retries_left: int) -> None:
        self.metrics['retries_used'] = self.config.retries - retries_left
        self.metrics['layers_generated'] = self.config.layers
        self.metrics['rooms'] = sum(1 for _ in room_map.rooms())
        self.metrics['keys'] = sum(len(v) for v in room_map.keys().values())
        for conn in room_map.connections:
            self.metrics[f'connections_{conn.state}'] += 1

    # ------------------------------------------------------------------
    # Snapshot transitions
    # ------------------------------------------------------------------
    def initial_state(self) -> GenerationState:
        room_map = RoomMap.with_size(self.config.width, self.config.height)
        pos = Position(
            self._rng.randint(0, room_map.height - 1),
            self._rng.randint(0, room_map.width - 1),
        )
        room_map.set_room(pos, Room(layer=0))
        return GenerationState(room_map=room_map, positions=[pos], amount=1, layer=0)

    def next_state(self, state: GenerationState) -> GenerationState:
        """Derive a snapshot one layer deeper; ``state`` is left untouched."""
        nxt = state.derive()
        nxt.layer += 1
        nxt.amount = self._rng.randint(self.config.min_amount, self.config.max_amount)
        for _ in range(nxt.amount):
            self._place_room(nxt, skip=state.layer_start())
        locked = self._wire_connections(nxt, state)
        if not state.is_root:
            self._distribute_keys(nxt, state, locked)
        return nxt

    def final_state(self, state: GenerationState) -> GenerationState:
        final = state.derive()
        final.layer += 1
        final.amount = 1
        spaces = self.available_spaces(final, skip=0)
        if not spaces:
            raise FinalizeError("No available space for the terminal room")
        end_pos = self._rng.choice(spaces)
        final.positions.append(end_pos)
        final.room_map.set_room(end_pos, Room(layer=final.layer))

        anchors = [p for p in end_pos.neighbors() if state.room_map.get_room(p) is not None]
        if not anchors:
            raise FinalizeError(f"Terminal room at {end_pos} has no neighbouring room")
        anchor = self._rng.choice(anchors)
        final.room_map.add_connection(Connection(Edge(end_pos, anchor), LOCKED))

        holders = [
            p for p in state.layer_positions() if not final.room_map.get_room(p).has_key
        ]
        if not holders:
            raise FinalizeError(f"No room in layer {state.layer} can hold the terminal key")
        key_pos = self._rng.choice(holders)
        final.room_map.set_room(key_pos, final.room_map.get_room(key_pos).with_key(final.layer))
        return final

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def available_spaces(self, state: GenerationState, skip: int) -> List[Position]:
        """Free in-bounds neighbours of ``state.positions[skip:]``, de-duplicated in order."""
        occupied = set(state.positions)
        row_max = state.room_map.height - 1
        col_max = state.room_map.width - 1
        spaces: Dict[Position, None] = {}
        for pos in state.positions[skip:]:
            for offset in DIRECTIONS:
                cand = (pos + offset).in_range(0, row_max, 0, col_max)
                if cand is not None and cand not in occupied:
                    spaces[cand] = None
        return list(spaces)

    def _place_room(self, state: GenerationState, skip: int) -> None:
        spaces = self.available_spaces(state, skip)
        if not spaces:
            raise NoAvailableSpace(state.layer)
        pos = spaces[self._rng.randrange(len(spaces))]
        state.positions.append(pos)
        state.room_map.set_room(pos, Room(layer=state.layer))

    def _wire_connections(self, state: GenerationState, parent: GenerationState) -> int:
        """Connect the new layer; returns the number of locked inter-layer connections."""
        room_map = state.room_map
        prev_layer = set(parent.layer_positions())
        new_layer = state.positions[len(parent.positions):]
        new_set = set(new_layer)
        placed = set(state.positions)
        inter_state = OPEN if parent.is_root else LOCKED
        locked = 0

        def connect(edge: Edge, conn_state: str) -> bool:
            if room_map.get_connection(edge) is not None:
                return False
            room_map.add_connection(Connection(edge, conn_state))
            return True

        for pos in new_layer:
            for other in pos.neighbors():
                if other in prev_layer and connect(Edge(other, pos), inter_state) and inter_state == LOCKED:
                    locked += 1
        for pos in new_layer:
            for other in pos.neighbors():
                if other in new_set:
                    connect(Edge(other, pos), OPEN)
        for pos in new_layer:
            for other in pos.neighbors():
                if other in placed:
                    connect(Edge(other, pos), SHORTCUT)
        return locked

    def _distribute_keys(self, state: GenerationState, parent: GenerationState, amount: int) -> None:
        # the start room never holds a key
        holders = [p for p in parent.positions[1:] if not parent.room_map.get_room(p).has_key]
        if len(holders) < amount:
            raise InsufficientKeyHolders(state.layer, amount, len(holders))
        for pos in self._rng.sample(holders, amount):
            room = state.room_map.get_room(pos)
            state.room_map.set_room(pos, room.with_key(state.layer))


def generate(
    width: int | None = None,
    height: int | None = None,
    layers: int | None = None,
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
    config: GeneratorConfig | None = None,
) -> RoomMap:
    """Generate a finished room map or raise ``GenerationError``.

    ``layers`` counts the keyed layers beyond the start room; one extra
    terminal layer (``layers + 1``) is always appended. Pass either the
    extents (omitted ones fall back to ``GeneratorConfig`` defaults) or a
    whole ``config``; mixing the two raises ``ValueError``.
    """
    overrides = {"width": width, "height": height, "layers": layers, "seed": seed}
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if config is None:
        config = GeneratorConfig(**overrides)
    elif overrides:
        raise ValueError(f"pass a config or explicit {', '.join(sorted(overrides))}, not both")
    return LayerGenerator(config, rng=rng).run()


__all__ = ["GenerationState", "LayerGenerator", "generate", "GenerationError"]
